from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from typing import BinaryIO, Dict

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
PYTEST_TEMP = Path(os.environ.get("PYTEST_DEBUG_TEMPROOT", "/tmp/resourcefetcher-pytest")).resolve()
os.environ.setdefault("PYTEST_DEBUG_TEMPROOT", str(PYTEST_TEMP))
PYTEST_TEMP.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("RESOURCEFETCHER_HOME", str(PYTEST_TEMP / "global-home"))
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from resourcefetcher.adapters import DirectoryResourceBundle  # noqa: E402
from resourcefetcher.ports.bundle import ResourceBundle  # noqa: E402
from resourcefetcher.settings import RuntimeSettings  # noqa: E402
from resourcefetcher.utils.executor import shutdown_executor  # noqa: E402


BUNDLE_FILES: Dict[str, bytes] = {
    "hello.cmd": b"@echo off\r\necho hello\r\n",
    "payload.bin": bytes(range(256)) * 64,
    "scripts/run.sh": b"#!/bin/sh\necho run\n",
}


class CountingBundle(ResourceBundle):
    """Wraps another bundle and counts lookups per name."""

    def __init__(self, inner: ResourceBundle) -> None:
        self._inner = inner
        self._lock = threading.Lock()
        self.calls: Dict[str, int] = {}

    def open(self, name: str) -> BinaryIO | None:
        with self._lock:
            self.calls[name] = self.calls.get(name, 0) + 1
        return self._inner.open(name)

    def describe(self) -> str:
        return "counting:" + self._inner.describe()


@pytest.fixture()
def settings(tmp_path: Path) -> RuntimeSettings:
    home = tmp_path / "home"
    temp_root = tmp_path / "tmp-root"
    log_dir = home / "logs"
    for directory in (home, temp_root, log_dir):
        directory.mkdir(parents=True, exist_ok=True)
    return RuntimeSettings(home_dir=home, temp_root=temp_root, log_dir=log_dir, max_workers=4)


@pytest.fixture()
def bundle_dir(tmp_path: Path) -> Path:
    root = tmp_path / "bundle"
    for name, data in BUNDLE_FILES.items():
        target = root / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    return root


@pytest.fixture()
def bundle(bundle_dir: Path) -> CountingBundle:
    return CountingBundle(DirectoryResourceBundle(bundle_dir))


@pytest.fixture(autouse=True)
def _reset_executor():
    yield
    shutdown_executor()


@pytest.fixture()
def bundle_files() -> Dict[str, bytes]:
    return dict(BUNDLE_FILES)
