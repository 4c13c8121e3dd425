"""Port definition for bundled resource lookup."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO


class ResourceBundle(ABC):
    @abstractmethod
    def open(self, name: str) -> BinaryIO | None:
        """Return a binary stream positioned at the start of ``name`` or ``None`` if absent."""

    @abstractmethod
    def describe(self) -> str:
        """Return a short human-readable label for the bundle."""


def resource_parts(name: str) -> tuple[str, ...]:
    """Split a bundle-relative POSIX name into path segments.

    Raises ``ValueError`` for empty, absolute or parent-escaping names.
    """

    if not name or not name.strip():
        raise ValueError("Resource name must not be empty")
    if name.startswith("/") or "\\" in name:
        raise ValueError(f"Resource name '{name}' must be a relative POSIX path")
    parts = tuple(part for part in name.split("/") if part not in ("", "."))
    if not parts or any(part == ".." for part in parts):
        raise ValueError(f"Resource name '{name}' escapes the bundle root")
    return parts


__all__ = ["ResourceBundle", "resource_parts"]
