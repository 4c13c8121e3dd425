"""Project temp directory holding extracted resources."""

from __future__ import annotations

import errno
import os
import threading
from concurrent.futures import Future
from pathlib import Path
from typing import Any, Dict, Iterable, List

from resourcefetcher.adapters.package_bundle import PackageResourceBundle
from resourcefetcher.domain.errors import ResourceAccessError, TempDirectoryDeletedError
from resourcefetcher.domain.resource import ResourceHandle
from resourcefetcher.ports.bundle import ResourceBundle, resource_parts
from resourcefetcher.settings import SETTINGS, RuntimeSettings
from resourcefetcher.utils.executor import shared_executor


class TempDirectory:
    """Temporary directory created for a particular project.

    ``TempDirectory(project_name)`` lives at ``<temp_root>/<project_name>``;
    ``TempDirectory(group_name, project_name)`` lives at
    ``<temp_root>/<group_name>/<project_name>``. A blank group name means no
    group. The group directory is shared between projects and is never
    removed by :meth:`delete`; only the project directory and its content are.

    Resources are looked up in ``bundle`` (a :class:`ResourceBundle` or the
    dotted name of a package shipping data files) and cached by name, so
    extracting the same resource twice copies it once. Use the instance as a
    context manager to guarantee cleanup::

        with TempDirectory(".test-group", "TestProject", bundle="myapp.assets") as folder:
            script = folder.extract("hello.cmd")
            subprocess.run([str(script.path)])
    """

    def __init__(
        self,
        *names: str,
        bundle: ResourceBundle | str | None = None,
        settings: RuntimeSettings | None = None,
    ) -> None:
        if len(names) == 1:
            group_name, project_name = "", names[0]
        elif len(names) == 2:
            group_name, project_name = names
        else:
            raise TypeError(
                f"TempDirectory expects (project_name) or (group_name, project_name), got {len(names)} names"
            )
        if not project_name or not project_name.strip():
            raise ValueError("Project name must not be blank")
        self._settings = settings or SETTINGS
        self._bundle: ResourceBundle | None = PackageResourceBundle(bundle) if isinstance(bundle, str) else bundle
        self._group_name = group_name or ""
        self._project_name = project_name

        folder = self._settings.temp_root
        if _has_group(self._group_name):
            folder = folder / self._group_name
            _create_directory(folder)
        folder = folder / self._project_name
        _create_directory(folder)

        self._folder_path = folder
        self._fetched_resources: Dict[str, ResourceHandle] = {}
        self._lock = threading.Lock()
        self._deleted = False

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(self, resource_name: str) -> ResourceHandle:
        """Extract ``resource_name`` into this directory, or return the cached handle.

        Blocks until the file is fully written. A cached handle is returned
        as-is, without checking that its file still exists on disk. Two
        threads extracting the same new name may both copy it; the last one
        to finish ends up in the cache.
        """

        if self._deleted:
            raise TempDirectoryDeletedError()
        with self._lock:
            cached = self._fetched_resources.get(resource_name)
        if cached is not None:
            return cached

        if self._bundle is None:
            raise ResourceAccessError(f"No resource bundle configured to extract '{resource_name}'")
        resource = ResourceHandle(
            resource_name,
            self._destination_for(resource_name),
            self,
            bundle=self._bundle,
        )
        with self._lock:
            self._fetched_resources[resource.name] = resource
        return resource

    def extract_async(self, resource_name: str) -> "Future[ResourceHandle]":
        """Run :meth:`extract` on the shared worker pool.

        Errors are delivered through the returned future, never raised here.
        """

        return shared_executor(self._settings.max_workers).submit(self.extract, resource_name)

    def extract_many(self, resource_names: Iterable[str]) -> List[ResourceHandle]:
        return [self.extract(name) for name in resource_names]

    # ------------------------------------------------------------------
    # Cleanup
    # ------------------------------------------------------------------

    def delete(self) -> None:
        """Delete the project directory and every file inside it.

        Entries are removed deepest first. The first failure aborts the
        operation; entries removed before it stay removed. Handles obtained
        earlier are dropped from the cache but keep ``deleted == False``.
        """

        try:
            entries = _walk_entries(self._folder_path)
        except OSError as exc:
            raise ResourceAccessError(f"Unable to access temp folder: {self._folder_path}") from exc

        for entry in sorted(entries, key=_removal_order):
            try:
                if entry.is_dir() and not entry.is_symlink():
                    entry.rmdir()
                else:
                    entry.unlink()
            except OSError as exc:
                raise ResourceAccessError(f"Error deleting temp file: {entry}") from exc

        self._deleted = True
        with self._lock:
            self._fetched_resources.clear()

    def close(self) -> None:
        """Same as :meth:`delete`; lets the instance act as a context manager."""

        self.delete()

    def __enter__(self) -> "TempDirectory":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def group_name(self) -> str:
        """Group directory name, or an empty string when no group was given."""

        return self._group_name

    @property
    def project_name(self) -> str:
        return self._project_name

    @property
    def folder_path(self) -> Path:
        return self._folder_path

    @property
    def bundle(self) -> ResourceBundle | None:
        return self._bundle

    @property
    def deleted(self) -> bool:
        return self._deleted

    @property
    def fetched_resources(self) -> List[ResourceHandle]:
        """Snapshot of extracted resources that have not been deleted yet."""

        with self._lock:
            return list(self._fetched_resources.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self._group_name,
            "project": self._project_name,
            "path": str(self._folder_path),
            "bundle": self._bundle.describe() if self._bundle is not None else None,
            "deleted": self._deleted,
            "resources": [resource.to_dict() for resource in self.fetched_resources],
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _remove_fetched_resource(self, name: str) -> None:
        with self._lock:
            self._fetched_resources.pop(name, None)

    def _destination_for(self, resource_name: str) -> Path:
        try:
            parts = resource_parts(resource_name)
        except ValueError as exc:
            raise ResourceAccessError(f"Unable to access resource '{resource_name}'") from exc
        return self._folder_path.joinpath(*parts)


def resolve_folder_path(temp_root: Path, group_name: str, project_name: str) -> Path:
    """Return the project directory path without touching the filesystem."""

    base = temp_root / group_name if _has_group(group_name) else temp_root
    return base / project_name


def _has_group(group_name: str) -> bool:
    return bool(group_name and group_name.strip())


def _create_directory(path: Path) -> None:
    try:
        path.mkdir(exist_ok=True)
    except OSError as exc:
        raise ResourceAccessError(f"Failed to create directory {path}") from exc


def _walk_entries(root: Path) -> List[Path]:
    if not root.is_dir():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(root))

    def _fail(exc: OSError) -> None:
        raise exc

    entries = [root]
    for current, dirnames, filenames in os.walk(root, onerror=_fail):
        base = Path(current)
        entries.extend(base / name for name in dirnames)
        entries.extend(base / name for name in filenames)
    return entries


def _removal_order(path: Path) -> tuple[int, str]:
    # descendants before ancestors
    return (-len(path.parts), str(path))


__all__ = ["TempDirectory", "resolve_folder_path"]
