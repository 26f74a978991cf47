"""Object store contract shared by substrates and the website service."""

from .protocol import ObjectStore
from .types import (
    LookupStatus,
    ObjectBody,
    ObjectContent,
    ObjectMetadata,
    StoreHealthStatus,
    StoreLookup,
)

__all__ = [
    "LookupStatus",
    "ObjectBody",
    "ObjectContent",
    "ObjectMetadata",
    "ObjectStore",
    "StoreHealthStatus",
    "StoreLookup",
]
