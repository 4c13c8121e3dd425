"""Runtime settings for resourcefetcher."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from resourcefetcher import __version__


CONFIG_FILE = "config.yaml"


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    temp_root: Path
    log_dir: Path
    max_workers: int | None = None
    cli_version: str = __version__

    @property
    def config_file(self) -> Path:
        return self.home_dir / CONFIG_FILE

    @property
    def telemetry_file(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir() -> Path:
    override = os.environ.get("RESOURCEFETCHER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".resourcefetcher"


def _read_config(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Configuration in {path} is not valid YAML: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    return payload


def _temp_root(config: Mapping[str, Any], path: Path) -> Path:
    value = config.get("temp_root")
    if value is None or value == "":
        return Path(tempfile.gettempdir())
    if not isinstance(value, str):
        raise ValueError(f"Configuration in {path}: temp_root must be a string path")
    return Path(value).expanduser()


def _max_workers(config: Mapping[str, Any], path: Path) -> int | None:
    value = config.get("max_workers")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Configuration in {path}: max_workers must be a positive integer")
    return value


def load_settings(home_dir: Path | None = None) -> RuntimeSettings:
    base = home_dir or _default_home_dir()
    config_path = base / CONFIG_FILE
    config = _read_config(config_path)
    return RuntimeSettings(
        home_dir=base,
        temp_root=_temp_root(config, config_path),
        log_dir=base / "logs",
        max_workers=_max_workers(config, config_path),
    )


SETTINGS = load_settings()
