from __future__ import annotations

import logging
from typing import Protocol

from .command import run_cmd

logger = logging.getLogger(__name__)


class FetchService(Protocol):
    """Downloads ``url`` to ``dest`` and returns the exit status."""

    def fetch(self, url: str, dest: str) -> int:
        ...


class CurlFetchService:
    def fetch(self, url: str, dest: str) -> int:
        r = run_cmd(
            [
                "curl",
                "--fail",
                "--location",
                "--silent",
                "--show-error",
                "--output",
                dest,
                url,
            ]
        )
        return r.returncode
