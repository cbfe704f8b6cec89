from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

DEFAULT_LOG_NAME = "dmg2pkg.log"


def configure_logging(
    level: int = logging.INFO,
    log_path: Optional[str] = None,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging.

    Console output goes to stderr with a short ``LEVEL: message`` format so
    that stdout stays free for listings. When ``log_path`` is given, a file
    handler with timestamps is added as well.

    Notes:
    - If the requested log file cannot be opened we fall back to a file in
      the current working directory, while still reporting the intended path.
    - Calling this twice only adjusts the level; handlers are not duplicated.

    Returns the actual file path being used, or None for console only.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    if getattr(logger, "_dmg2pkg_configured", False):
        return getattr(logger, "_dmg2pkg_log_path", log_path)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    if log_path:
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            fallback = str(Path.cwd() / DEFAULT_LOG_NAME)
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_dmg2pkg_configured", True)
    setattr(logger, "_dmg2pkg_log_path", chosen_path)

    logging.getLogger(__name__).debug(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
