"""Bundle adapters."""

from .fs_bundle import DirectoryResourceBundle
from .package_bundle import PackageResourceBundle

__all__ = ["DirectoryResourceBundle", "PackageResourceBundle"]
