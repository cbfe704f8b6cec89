from __future__ import annotations

import logging
from typing import Protocol

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


class BuildService(Protocol):
    def build(self, root: str, install_location: str, output: str) -> CmdResult:
        ...


class PkgbuildService:
    def build(self, root: str, install_location: str, output: str) -> CmdResult:
        return run_cmd(
            [
                "pkgbuild",
                "--root",
                root,
                "--install-location",
                install_location,
                output,
            ]
        )
