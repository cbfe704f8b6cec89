from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from ..config import Config
from ..errors import DirCreateError, ToolMissingError

logger = logging.getLogger(__name__)


class Environment:
    """Tool checks and working directories for a run."""

    def __init__(self, config: Config):
        self.config = config

    def check_tools(self, required: Iterable[str] | None = None) -> None:
        for tool in required if required is not None else self.config.required_tools:
            if shutil.which(tool) is None:
                raise ToolMissingError(tool)
            logger.debug("Found required tool %s", tool)

    def prepare_dirs(self) -> None:
        for label, path in (
            ("temporary", self.config.tmp_dir),
            ("destination", self.config.dest_dir),
        ):
            try:
                Path(path).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                # Not fatal: the step that needs the folder will fail on its own.
                err = DirCreateError(f"Failed to create {label} folder {path}: {e}")
                logger.error("%s", err)

    def cleanup(self) -> None:
        tmp = Path(self.config.tmp_dir)
        if tmp.exists():
            logger.debug("Removing %s", tmp)
            shutil.rmtree(tmp, ignore_errors=True)
