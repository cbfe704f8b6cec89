from __future__ import annotations

from pathlib import Path

import pytest

from conftest import FakeBuildService, FakeMountService
from dmg2pkg.errors import FallbackFailedError
from dmg2pkg.image import ImageHandler
from dmg2pkg.packager import Packager
from dmg2pkg.pipeline import WorkItem


@pytest.fixture
def item(config) -> WorkItem:
    Path(config.dest_dir).mkdir(parents=True)
    Path(config.tmp_dir).mkdir(parents=True)
    image = config.image_path("App")
    image.write_bytes(b"dmg")
    return WorkItem(name="App", url="https://example.com/a.dmg", image_path=str(image), volumes=["/Volumes/App"])


def test_build_replaces_existing_package(config, item: WorkItem) -> None:
    pkg = config.package_path("App")
    pkg.write_bytes(b"old")
    builder = FakeBuildService([0])

    result = Packager(builder, ImageHandler(FakeMountService(), config), config).build("/Volumes/App", str(pkg))

    assert result.ok
    assert pkg.read_bytes() == b"pkg"
    assert builder.calls == [("/Volumes/App", "/Applications", str(pkg))]


def test_failed_build_removes_stale_package(config, item: WorkItem) -> None:
    pkg = config.package_path("App")
    pkg.write_bytes(b"old")
    result = Packager(FakeBuildService([1]), ImageHandler(FakeMountService(), config), config).build(
        "/Volumes/App", str(pkg)
    )
    assert not result.ok
    assert not pkg.exists()


def test_primary_build(config, item: WorkItem) -> None:
    mounts = FakeMountService()
    result = Packager(FakeBuildService([0]), ImageHandler(mounts, config), config).package(item)

    assert result.ok
    assert item.used_fallback is False
    assert item.package_path == str(config.package_path("App"))
    assert mounts.calls == []
    assert config.build_log_path("App").read_text(encoding="utf-8") == item.build_log


def test_fallback_converts_and_rebuilds(config, item: WorkItem) -> None:
    mounts = FakeMountService(volumes=["/Volumes/App 1"])
    builder = FakeBuildService([1, 0])

    Packager(builder, ImageHandler(mounts, config), config).package(item)

    converted = str(config.converted_image_path("App"))
    assert item.used_fallback is True
    assert item.converted_path == converted
    assert item.volumes == ["/Volumes/App", "/Volumes/App 1"]
    assert mounts.ops() == ["convert", "attach"]
    assert [c[0] for c in builder.calls] == ["/Volumes/App", "/Volumes/App 1"]


def test_fallback_convert_failure(config, item: WorkItem) -> None:
    builder = FakeBuildService([1])
    packager = Packager(builder, ImageHandler(FakeMountService(convert_rc=1), config), config)
    with pytest.raises(FallbackFailedError):
        packager.package(item)
    assert len(builder.calls) == 1


def test_fallback_mount_failure(config, item: WorkItem) -> None:
    builder = FakeBuildService([1])
    packager = Packager(builder, ImageHandler(FakeMountService(volumes=[None]), config), config)
    with pytest.raises(FallbackFailedError):
        packager.package(item)
    assert len(builder.calls) == 1


def test_fallback_build_failure_is_final(config, item: WorkItem) -> None:
    builder = FakeBuildService([1, 1, 0])
    packager = Packager(builder, ImageHandler(FakeMountService(volumes=["/Volumes/C"]), config), config)
    with pytest.raises(FallbackFailedError):
        packager.package(item)
    assert len(builder.calls) == 2
