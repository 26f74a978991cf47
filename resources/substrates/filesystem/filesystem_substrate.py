"""Object store that serves files from a local directory tree."""

from __future__ import annotations

import os
from datetime import UTC, datetime

from packages.website_shared.errors import exception_to_error
from packages.website_shared.object_store import (
    ObjectContent,
    ObjectMetadata,
    StoreHealthStatus,
    StoreLookup,
)
from resources.substrates.filesystem.config import FilesystemSubstrateSettings
from resources.substrates.filesystem.validation import resolve_key_path


class LocalDirectoryObjectStore:
    """Map object keys onto regular files below one root directory.

    The store reports no content type or cache-control directive; callers fall
    back to extension inference and their default freshness policy.
    """

    def __init__(self, *, settings: FilesystemSubstrateSettings) -> None:
        self._root = settings.root_path()

    def health(self) -> StoreHealthStatus:
        """Return readiness based on root directory access."""
        try:
            if not self._root.is_dir():
                return StoreHealthStatus(
                    ready=False,
                    detail=f"root path is not a directory: {self._root}",
                )
            os.scandir(self._root).close()
        except OSError as exc:
            return StoreHealthStatus(
                ready=False,
                detail=f"filesystem probe failed: {type(exc).__name__}",
            )
        return StoreHealthStatus(ready=True, detail="ok")

    def head_object(self, key: str) -> StoreLookup[ObjectMetadata]:
        """Return metadata from ``stat`` for one file."""
        path = resolve_key_path(root=self._root, key=key)
        if path is None:
            return StoreLookup.absent()
        try:
            stat = path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return StoreLookup.absent()
        except OSError as exc:
            return StoreLookup.failed(exception_to_error(exc))
        if not path.is_file():
            return StoreLookup.absent()
        return StoreLookup.found(_metadata(stat))

    def get_object(self, key: str) -> StoreLookup[ObjectContent]:
        """Open one file and return its metadata and binary handle."""
        path = resolve_key_path(root=self._root, key=key)
        if path is None or path.is_dir():
            return StoreLookup.absent()
        try:
            handle = path.open("rb")
        except (FileNotFoundError, NotADirectoryError):
            return StoreLookup.absent()
        except OSError as exc:
            return StoreLookup.failed(exception_to_error(exc))
        try:
            stat = os.fstat(handle.fileno())
        except OSError as exc:
            handle.close()
            return StoreLookup.failed(exception_to_error(exc))
        return StoreLookup.found(ObjectContent(metadata=_metadata(stat), body=handle))


def _metadata(stat: os.stat_result) -> ObjectMetadata:
    """Build object metadata from one ``stat`` result."""
    return ObjectMetadata(
        content_length=stat.st_size,
        last_modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
    )
