"""Domain exports."""

from .errors import ResourceAccessError, ResourceDeletedError, TempDirectoryDeletedError
from .resource import ResourceHandle
from .temp_directory import TempDirectory

__all__ = [
    "ResourceAccessError",
    "ResourceDeletedError",
    "ResourceHandle",
    "TempDirectory",
    "TempDirectoryDeletedError",
]
