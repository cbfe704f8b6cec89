from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .command import run_cmd

logger = logging.getLogger(__name__)

VOLUMES_ROOT = "/Volumes/"


@dataclass(frozen=True)
class AttachResult:
    returncode: int
    volume_path: Optional[str]


class MountService(Protocol):
    """Disk image operations, reported as exit statuses."""

    def verify(self, image: str) -> int:
        ...

    def attach(self, image: str) -> AttachResult:
        ...

    def detach(self, volume: str) -> int:
        ...

    def convert(self, image: str, fmt: str, output: str) -> int:
        ...


def parse_volume_path(output: str) -> Optional[str]:
    """Return the mount point from ``hdiutil attach`` output.

    Output lines are tab separated: device, partition type, mount point.
    The mount point is the last field and may contain spaces.
    """
    for line in output.splitlines():
        if VOLUMES_ROOT not in line:
            continue
        field = line.split("\t")[-1].strip()
        if field.startswith(VOLUMES_ROOT):
            return field
        # Not tab separated; take everything from the volumes root on.
        return line[line.index(VOLUMES_ROOT):].strip()
    return None


class HdiutilService:
    def verify(self, image: str) -> int:
        return run_cmd(["hdiutil", "verify", image]).returncode

    def attach(self, image: str) -> AttachResult:
        r = run_cmd(["hdiutil", "attach", "-nobrowse", image])
        volume = parse_volume_path(r.stdout) if r.ok else None
        return AttachResult(returncode=r.returncode, volume_path=volume)

    def detach(self, volume: str) -> int:
        return run_cmd(["hdiutil", "detach", volume]).returncode

    def convert(self, image: str, fmt: str, output: str) -> int:
        return run_cmd(["hdiutil", "convert", image, "-format", fmt, "-o", output]).returncode
