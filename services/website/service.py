"""Authoritative in-process Python API for the website service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from packages.website_shared.config import SiteSettings
from packages.website_shared.object_store import ObjectStore
from services.website.domain import (
    HealthStatus,
    ResolvedAction,
    WebsiteRequest,
    WebsiteResponse,
)


class WebsiteService(ABC):
    """Public API for serving a static website out of an object store."""

    @abstractmethod
    def serve(self, *, request: WebsiteRequest) -> WebsiteResponse:
        """Resolve and build the complete response for one request."""

    @abstractmethod
    def resolve(self, *, path: str) -> ResolvedAction:
        """Return the resolution for one path without fetching content."""

    @abstractmethod
    def health(self) -> HealthStatus:
        """Return service and object store readiness."""


def build_object_store(*, settings: SiteSettings) -> ObjectStore:
    """Build the object store selected by ``components.service.website.backend``."""
    from services.website.config import resolve_website_settings

    backend = resolve_website_settings(settings).backend
    if backend == "filesystem":
        from resources.substrates.filesystem.component import build_component

        return build_component(settings=settings)

    from resources.substrates.s3.component import build_component

    return build_component(settings=settings)


def build_website_service(
    *,
    settings: SiteSettings,
    store: ObjectStore | None = None,
) -> WebsiteService:
    """Build the default website service from typed settings."""
    from services.website.config import resolve_website_settings
    from services.website.implementation import DefaultWebsiteService

    return DefaultWebsiteService(
        settings=resolve_website_settings(settings),
        store=store or build_object_store(settings=settings),
    )
