"""Component declaration for the S3 object store substrate."""

from __future__ import annotations

from packages.website_shared.config import SiteSettings
from packages.website_shared.object_store import ObjectStore

RESOURCE_COMPONENT_ID = "substrate_s3"


def build_component(*, settings: SiteSettings) -> ObjectStore:
    """Build the configured S3 object store for this process."""
    from resources.substrates.s3.config import resolve_s3_substrate_settings
    from resources.substrates.s3.s3_substrate import S3ObjectStore

    return S3ObjectStore.from_settings(resolve_s3_substrate_settings(settings))
