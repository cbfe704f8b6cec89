from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import pytest

from dmg2pkg.config import Config
from dmg2pkg.lib.command import CmdResult
from dmg2pkg.lib.hdiutil import AttachResult


class FakeFetchService:
    """Returns the queued exit statuses; writes a file on success."""

    def __init__(self, statuses: Optional[List[int]] = None):
        self.statuses = list(statuses if statuses is not None else [0])
        self.calls: List[tuple] = []

    def fetch(self, url: str, dest: str) -> int:
        self.calls.append((url, dest))
        rc = self.statuses.pop(0) if self.statuses else 0
        if rc == 0:
            Path(dest).write_bytes(b"dmg")
        return rc


class FakeMountService:
    """In-memory stand-in for hdiutil.

    ``verify_rc=None`` means "valid iff the file exists". ``volumes`` is
    consumed one per attach; ``None`` simulates an attach without a volume.
    """

    def __init__(
        self,
        *,
        verify_rc: Optional[int] = None,
        volumes: Optional[List[Optional[str]]] = None,
        convert_rc: int = 0,
        detach_rc: int = 0,
    ):
        self.verify_rc = verify_rc
        self.volumes = list(volumes if volumes is not None else ["/Volumes/App"])
        self.convert_rc = convert_rc
        self.detach_rc = detach_rc
        self.calls: List[tuple] = []

    def verify(self, image: str) -> int:
        self.calls.append(("verify", image))
        if self.verify_rc is None:
            return 0 if Path(image).exists() else 1
        return self.verify_rc

    def attach(self, image: str) -> AttachResult:
        self.calls.append(("attach", image))
        volume = self.volumes.pop(0) if self.volumes else None
        return AttachResult(returncode=0 if volume else 1, volume_path=volume)

    def detach(self, volume: str) -> int:
        self.calls.append(("detach", volume))
        return self.detach_rc

    def convert(self, image: str, fmt: str, output: str) -> int:
        self.calls.append(("convert", image, fmt, output))
        if self.convert_rc == 0:
            Path(output).write_bytes(b"converted")
        return self.convert_rc

    def ops(self) -> List[str]:
        return [c[0] for c in self.calls]


class FakeBuildService:
    """Returns the queued exit statuses; writes the package on success."""

    def __init__(self, statuses: Optional[List[int]] = None):
        self.statuses = list(statuses if statuses is not None else [0])
        self.calls: List[tuple] = []

    def build(self, root: str, install_location: str, output: str) -> CmdResult:
        self.calls.append((root, install_location, output))
        rc = self.statuses.pop(0) if self.statuses else 0
        if rc == 0:
            Path(output).write_bytes(b"pkg")
        return CmdResult(
            argv=["pkgbuild", "--root", root, "--install-location", install_location, output],
            returncode=rc,
            stdout="pkgbuild: Wrote package\n" if rc == 0 else "",
            stderr="" if rc == 0 else "pkgbuild: error\n",
        )


class RecordingConfirm:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.questions: List[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_dmg2pkg_configured", "_dmg2pkg_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(
        dest_dir=str(tmp_path / "apps"),
        tmp_dir=str(tmp_path / "tmp"),
        catalog_path=str(tmp_path / "software_list.csv"),
        required_tools=(),
    )
