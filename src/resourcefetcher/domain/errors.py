"""Errors raised by temp directory and resource operations."""

from __future__ import annotations


class ResourceAccessError(RuntimeError):
    """Raised when a file or directory cannot be read, written or removed.

    The originating ``OSError`` (if any) is chained as ``__cause__``.
    """


class ResourceDeletedError(RuntimeError):
    """Raised when an already deleted resource is accessed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource {name} has already been deleted!")
        self.name = name


class TempDirectoryDeletedError(RuntimeError):
    """Raised when extracting into a temp directory that was deleted."""

    def __init__(self) -> None:
        super().__init__("Temp folder has already been deleted!")


__all__ = ["ResourceAccessError", "ResourceDeletedError", "TempDirectoryDeletedError"]
