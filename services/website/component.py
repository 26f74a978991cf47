"""Component declaration for the website service."""

from __future__ import annotations

from packages.website_shared.config import SiteSettings
from packages.website_shared.object_store import ObjectStore

SERVICE_COMPONENT_ID = "service_website"


def build_component(
    *, settings: SiteSettings, store: ObjectStore | None = None
) -> object:
    """Build the website service, constructing its object store when omitted."""
    from services.website.service import build_website_service

    return build_website_service(settings=settings, store=store)
