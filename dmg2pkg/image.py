from __future__ import annotations

import logging
from pathlib import Path

from .config import Config
from .errors import ConvertError, MountError
from .lib.hdiutil import MountService

logger = logging.getLogger(__name__)


class ImageHandler:
    def __init__(self, service: MountService, config: Config):
        self.service = service
        self.config = config

    def verify(self, image: str) -> bool:
        logger.info("Verifying .dmg file integrity...")
        return self.service.verify(image) == 0

    def mount(self, image: str) -> str:
        logger.debug("Mounting %s...", Path(image).name)
        r = self.service.attach(image)
        if not r.volume_path:
            raise MountError(f"Failed to mount {Path(image).name} properly.")
        logger.debug(
            "%s has been successfully mounted to volume %s.",
            Path(image).name,
            Path(r.volume_path).name,
        )
        return r.volume_path

    def detach(self, volume: str) -> None:
        rc = self.service.detach(volume)
        if rc != 0:
            logger.warning("Failed to detach %s (status %d)", volume, rc)

    def convert(self, image: str, output: str) -> str:
        """Convert ``image`` into a read-only image at ``output``."""

        Path(output).unlink(missing_ok=True)
        rc = self.service.convert(image, self.config.convert_format, output)
        if rc != 0:
            raise ConvertError(
                f"Failed to convert {Path(image).name} (status {rc}). "
                "Please check the .dmg file or conversion permissions."
            )
        return output
