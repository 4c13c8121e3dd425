"""Bundle backed by package data shipped with an importable package."""

from __future__ import annotations

from importlib import resources
from typing import BinaryIO

from resourcefetcher.domain.errors import ResourceAccessError
from resourcefetcher.ports.bundle import ResourceBundle, resource_parts


class PackageResourceBundle(ResourceBundle):
    """Looks resources up with ``importlib.resources`` relative to ``package``.

    Works for regular installs as well as zip imports, where the data never
    exists as a plain file until it is extracted.
    """

    def __init__(self, package: str) -> None:
        self._package = package
        try:
            self._root = resources.files(package)
        except (ModuleNotFoundError, TypeError) as exc:
            raise ResourceAccessError(f"Unable to load resource package '{package}'") from exc

    @property
    def package(self) -> str:
        return self._package

    def open(self, name: str) -> BinaryIO | None:
        target = self._root.joinpath(*resource_parts(name))
        if not target.is_file():
            return None
        return target.open("rb")

    def describe(self) -> str:
        return f"package:{self._package}"


__all__ = ["PackageResourceBundle"]
