from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

from .errors import ConfigError

DEFAULT_REQUIRED_TOOLS = ("curl", "hdiutil", "pkgbuild")


@dataclass(frozen=True)
class Config:
    dest_dir: str = "./apps"
    tmp_dir: str = "./tmp"
    catalog_path: str = "./software_list.csv"
    debug: bool = False
    install_location: str = "/Applications"
    convert_format: str = "UDZO"
    download_attempts: int = 3
    required_tools: Tuple[str, ...] = DEFAULT_REQUIRED_TOOLS

    def image_path(self, name: str) -> Path:
        return Path(self.tmp_dir) / f"{name}.dmg"

    def converted_image_path(self, name: str) -> Path:
        return Path(self.tmp_dir) / f"{name}-converted.dmg"

    def package_path(self, name: str) -> Path:
        return Path(self.dest_dir) / f"{name}.pkg"

    def build_log_path(self, name: str) -> Path:
        return Path(self.dest_dir) / f"{name}.pkgbuild.log"


def config_from_mapping(raw: Dict[str, Any]) -> Config:
    known = {f.name for f in fields(Config)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    values = dict(raw)
    if "required_tools" in values:
        tools = values["required_tools"]
        if not isinstance(tools, (list, tuple)):
            raise ConfigError("required_tools must be a list")
        values["required_tools"] = tuple(str(t) for t in tools)
    if "download_attempts" in values:
        try:
            values["download_attempts"] = int(values["download_attempts"])
        except (TypeError, ValueError) as e:
            raise ConfigError("download_attempts must be an integer") from e
        if values["download_attempts"] < 1:
            raise ConfigError("download_attempts must be at least 1")
    for key in ("dest_dir", "tmp_dir", "catalog_path", "install_location", "convert_format"):
        if key in values:
            values[key] = str(values[key])
    if "debug" in values:
        values["debug"] = bool(values["debug"])

    return Config(**values)


def load_config(path: str) -> Config:
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError("config must contain a mapping/object")

    return config_from_mapping(raw)
