from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import DownloadFailedError
from .lib.curl import FetchService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    ok: bool
    attempts: int
    path: str


class Fetcher:
    """Downloads a disk image with a bounded number of attempts."""

    def __init__(self, service: FetchService, attempts: int = 3):
        self.service = service
        self.attempts = attempts

    def download(self, url: str, dest: str) -> FetchResult:
        logger.info("Downloading %s...", url)
        Path(dest).parent.mkdir(parents=True, exist_ok=True)

        attempt = 0
        while attempt < self.attempts:
            attempt += 1
            # Each attempt starts from scratch; curl overwrites the output.
            if self.service.fetch(url, dest) == 0:
                logger.debug("Downloaded %s to %s (attempt %d)", url, dest, attempt)
                return FetchResult(ok=True, attempts=attempt, path=dest)
            logger.warning(
                "Download error (attempt %d/%d).%s",
                attempt,
                self.attempts,
                " Retrying..." if attempt < self.attempts else "",
            )

        logger.error("%s", DownloadFailedError(f"Failed to download file from {url}."))
        return FetchResult(ok=False, attempts=attempt, path=dest)
