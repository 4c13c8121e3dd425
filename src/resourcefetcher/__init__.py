"""Extract bundled resources into a per-project temp directory."""

from __future__ import annotations

__version__ = "0.1.0"

from resourcefetcher.domain import (  # noqa: E402
    ResourceAccessError,
    ResourceDeletedError,
    ResourceHandle,
    TempDirectory,
    TempDirectoryDeletedError,
)

__all__ = [
    "__version__",
    "ResourceAccessError",
    "ResourceDeletedError",
    "ResourceHandle",
    "TempDirectory",
    "TempDirectoryDeletedError",
]
