"""Filesystem-backed bundle."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from resourcefetcher.ports.bundle import ResourceBundle, resource_parts


class DirectoryResourceBundle(ResourceBundle):
    def __init__(self, root: Path) -> None:
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        return self._root

    def open(self, name: str) -> BinaryIO | None:
        target = self._root.joinpath(*resource_parts(name))
        if not target.is_file():
            return None
        return target.open("rb")

    def describe(self) -> str:
        return f"directory:{self._root}"


__all__ = ["DirectoryResourceBundle"]
