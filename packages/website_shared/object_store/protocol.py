"""Protocol every object store substrate implements."""

from __future__ import annotations

from typing import Protocol

from packages.website_shared.object_store.types import (
    ObjectContent,
    ObjectMetadata,
    StoreHealthStatus,
    StoreLookup,
)


class ObjectStore(Protocol):
    """Read-only, key-addressed object store used to serve website content."""

    def head_object(self, key: str) -> StoreLookup[ObjectMetadata]:
        """Fetch metadata for ``key`` without transferring the body."""

    def get_object(self, key: str) -> StoreLookup[ObjectContent]:
        """Fetch metadata and a body stream for ``key``."""

    def health(self) -> StoreHealthStatus:
        """Probe store readiness."""
