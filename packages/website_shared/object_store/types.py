"""Transport-neutral value types for object store lookups."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from packages.website_shared.errors import ErrorDetail


class ObjectMetadata(BaseModel):
    """Attributes the store reports for one object."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    content_type: str | None = None
    content_length: int | None = Field(default=None, ge=0)
    last_modified: datetime | None = None
    cache_control: str | None = None


class ObjectBody(Protocol):
    """Readable byte stream for one object body."""

    def read(self) -> bytes:
        """Read the remaining body bytes."""


@dataclass(frozen=True)
class ObjectContent:
    """Object body stream plus the metadata returned alongside it."""

    metadata: ObjectMetadata
    body: ObjectBody

    def read_all(self) -> bytes:
        """Read the full body and release the stream."""
        try:
            return self.body.read()
        finally:
            self.close()

    def close(self) -> None:
        """Close the underlying stream when it supports closing."""
        close = getattr(self.body, "close", None)
        if callable(close):
            close()


class LookupStatus(str, Enum):
    """Outcome tag of one store lookup."""

    FOUND = "found"
    ABSENT = "absent"
    ERROR = "error"


T = TypeVar("T")


@dataclass(frozen=True)
class StoreLookup(Generic[T]):
    """Tagged lookup result distinguishing absence from store failure."""

    status: LookupStatus
    value: T | None = None
    error: ErrorDetail | None = None

    @classmethod
    def found(cls, value: T) -> StoreLookup[T]:
        """Build a FOUND result carrying ``value``."""
        return cls(status=LookupStatus.FOUND, value=value)

    @classmethod
    def absent(cls) -> StoreLookup[T]:
        """Build an ABSENT result."""
        return cls(status=LookupStatus.ABSENT)

    @classmethod
    def failed(cls, error: ErrorDetail) -> StoreLookup[T]:
        """Build an ERROR result carrying ``error``."""
        return cls(status=LookupStatus.ERROR, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def is_absent(self) -> bool:
        return self.status is LookupStatus.ABSENT


class StoreHealthStatus(BaseModel):
    """Object store readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    detail: str
