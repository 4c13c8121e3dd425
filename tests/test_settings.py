from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from resourcefetcher import __version__
from resourcefetcher.settings import CONFIG_FILE, load_settings


def test_defaults_use_system_temp_root(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)

    assert settings.home_dir == tmp_path
    assert settings.temp_root == Path(tempfile.gettempdir())
    assert settings.log_dir == tmp_path / "logs"
    assert settings.telemetry_file == tmp_path / "logs" / "telemetry.jsonl"
    assert settings.max_workers is None
    assert settings.cli_version == __version__


def test_config_file_overrides(tmp_path: Path) -> None:
    custom_root = tmp_path / "custom-tmp"
    (tmp_path / CONFIG_FILE).write_text(
        f"temp_root: {custom_root}\nmax_workers: 3\nunknown: ignored\n",
        encoding="utf-8",
    )

    settings = load_settings(tmp_path)

    assert settings.temp_root == custom_root
    assert settings.max_workers == 3
    assert settings.config_file == tmp_path / CONFIG_FILE


def test_config_file_must_be_mapping(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILE).write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(tmp_path)


def test_home_dir_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RESOURCEFETCHER_HOME", str(tmp_path / "rf-home"))

    settings = load_settings()

    assert settings.home_dir == tmp_path / "rf-home"


@pytest.mark.parametrize(
    "document",
    [
        "temp_root: [unterminated\n",
        "max_workers: many\n",
        "max_workers: 0\n",
        "max_workers: true\n",
        "temp_root: 42\n",
        "temp_root: {nested: value}\n",
    ],
)
def test_malformed_config_names_the_file(tmp_path: Path, document: str) -> None:
    config_path = tmp_path / CONFIG_FILE
    config_path.write_text(document, encoding="utf-8")

    with pytest.raises(ValueError) as excinfo:
        load_settings(tmp_path)

    assert str(config_path) in str(excinfo.value)
