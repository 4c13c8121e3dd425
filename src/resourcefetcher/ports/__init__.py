"""Port definitions for resourcefetcher collaborators."""

from .bundle import ResourceBundle, resource_parts

__all__ = ["ResourceBundle", "resource_parts"]
