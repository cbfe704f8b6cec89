from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import Config
from .errors import BuildFailedError, ConvertError, FallbackFailedError, MountError
from .image import ImageHandler
from .lib.pkgbuild import BuildService
from .pipeline import WorkItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    ok: bool
    returncode: int
    log: str


class Packager:
    """Builds ``<name>.pkg`` from a mounted volume, with a fallback path.

    Fallback: convert the downloaded image, mount the converted copy and
    build once more. There are no retries beyond that.
    """

    def __init__(self, service: BuildService, images: ImageHandler, config: Config):
        self.service = service
        self.images = images
        self.config = config

    def build(self, volume: str, output: str) -> BuildResult:
        out = Path(output)
        if out.exists():
            out.unlink()
        r = self.service.build(volume, self.config.install_location, output)
        return BuildResult(ok=r.ok, returncode=r.returncode, log=r.stdout + r.stderr)

    def package(self, item: WorkItem) -> BuildResult:
        if not item.volumes or not item.image_path:
            raise BuildFailedError(f"Nothing mounted for {item.name}")

        output = str(self.config.package_path(item.name))
        item.package_path = output

        logger.info("Converting %s to .pkg format...", item.name)
        result = self.build(item.volumes[-1], output)
        if not result.ok:
            logger.error(
                "Failed to convert %s to .pkg format (status %d).", item.name, result.returncode
            )
            logger.info("Retrying conversion with hdiutil convert...")
            item.used_fallback = True
            result = self._fallback(item, output)

        item.build_log = result.log
        log_path = self.config.build_log_path(item.name)
        try:
            log_path.write_text(result.log, encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write build log %s: %s", log_path, e)

        logger.info("Conversion to .pkg format was successful.")
        return result

    def _fallback(self, item: WorkItem, output: str) -> BuildResult:
        converted = str(self.config.converted_image_path(item.name))
        try:
            item.converted_path = self.images.convert(str(item.image_path), converted)
            volume = self.images.mount(converted)
        except (ConvertError, MountError) as e:
            raise FallbackFailedError(str(e)) from e
        item.volumes.append(volume)

        result = self.build(volume, output)
        if not result.ok:
            raise FallbackFailedError(
                f"Failed to convert {item.name} to .pkg format (status {result.returncode}). "
                "Please check the .dmg file or conversion permissions."
            )
        return result
