"""Domain contracts for website requests, resolution and responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Union

from pydantic import BaseModel, ConfigDict

from packages.website_shared.errors import ErrorDetail


@dataclass(frozen=True)
class WebsiteRequest:
    """Transport-neutral view of one inbound request.

    ``path`` is the percent-decoded URL path; ``headers`` is keyed by
    lower-cased header name.
    """

    path: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Return one request header value by case-insensitive name."""
        return self.headers.get(name.lower())

    @property
    def is_head(self) -> bool:
        return self.method.upper() == "HEAD"


@dataclass(frozen=True)
class WebsiteResponse:
    """Fully prepared response: status, headers and complete body."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    errors: tuple[ErrorDetail, ...] = ()

    @property
    def ok(self) -> bool:
        """Return True for any non-server-error status."""
        return self.status < 500


@dataclass(frozen=True)
class Serve:
    """Serve the object stored under ``key``."""

    key: str


@dataclass(frozen=True)
class RedirectTo:
    """Redirect the client to ``location``."""

    location: str
    status: int = 302


@dataclass(frozen=True)
class NotFound:
    """No object backs the requested path."""


@dataclass(frozen=True)
class Failed:
    """Resolution aborted because the store reported an error."""

    error: ErrorDetail

    @property
    def ok(self) -> bool:
        return False

    @property
    def errors(self) -> tuple[ErrorDetail, ...]:
        return (self.error,)


ResolvedAction = Union[Serve, RedirectTo, NotFound, Failed]


class HealthStatus(BaseModel):
    """Website service and object store readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    service_ready: bool
    store_ready: bool
    detail: str
