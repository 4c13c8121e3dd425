"""A single bundled resource extracted into a temp directory."""

from __future__ import annotations

import os
import shutil
import weakref
from pathlib import Path
from typing import TYPE_CHECKING, Any, BinaryIO, Dict

from resourcefetcher.domain.errors import ResourceAccessError, ResourceDeletedError
from resourcefetcher.ports.bundle import ResourceBundle

if TYPE_CHECKING:
    from resourcefetcher.domain.temp_directory import TempDirectory


class ResourceHandle:
    """Extracted copy of a bundled resource.

    The file already exists at :attr:`path` once the object is constructed.
    Handles are created by :meth:`TempDirectory.extract` and should not be
    instantiated directly. The owning temp directory is held through a weak
    reference and is only used to drop this handle from its cache on delete.
    """

    def __init__(
        self,
        name: str,
        destination: Path,
        owner: "TempDirectory",
        *,
        bundle: ResourceBundle,
    ) -> None:
        self._name = name
        self._path = destination
        self._owner = weakref.ref(owner)
        self._deleted = False
        self._copy_from(bundle)

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def temp_directory(self) -> "TempDirectory | None":
        return self._owner()

    @property
    def deleted(self) -> bool:
        return self._deleted

    def open(self) -> BinaryIO:
        """Open the extracted file (not the bundled original) for binary reading."""

        if self._deleted:
            raise ResourceDeletedError(self._name)
        try:
            return self._path.open("rb")
        except OSError as exc:
            raise ResourceAccessError(f"Unable to create input stream from file '{self._path}'") from exc

    def delete(self) -> None:
        """Remove this file from the temp directory, leaving other resources untouched.

        Calling it a second time raises :class:`ResourceAccessError` because the
        file is already gone.
        """

        try:
            self._path.unlink()
        except OSError as exc:
            raise ResourceAccessError(f"Unable to delete file '{self._path}'") from exc
        owner = self._owner()
        if owner is not None:
            owner._remove_fetched_resource(self._name)
        self._deleted = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "path": str(self._path),
            "deleted": self._deleted,
        }

    def __repr__(self) -> str:
        return f"ResourceHandle(name={self._name!r}, path={str(self._path)!r}, deleted={self._deleted})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _copy_from(self, bundle: ResourceBundle) -> None:
        try:
            source = bundle.open(self._name)
        except OSError as exc:
            raise ResourceAccessError(f"Unable to access resource '{self._name}'") from exc
        if source is None:
            raise ResourceAccessError(f"Unable to access resource '{self._name}'")

        created = False
        with source:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("wb") as target:
                    created = True
                    shutil.copyfileobj(source, target)
                    target.flush()
                    os.fsync(target.fileno())
            except BaseException as exc:
                # no partially written file may outlive a failed construction
                if created and self._path.is_file():
                    self._path.unlink()
                if isinstance(exc, OSError):
                    raise ResourceAccessError(f"Unable to access destination path '{self._path}'") from exc
                raise


__all__ = ["ResourceHandle"]
