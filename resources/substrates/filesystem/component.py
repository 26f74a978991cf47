"""Component declaration for the local directory object store substrate."""

from __future__ import annotations

from packages.website_shared.config import SiteSettings
from packages.website_shared.object_store import ObjectStore

RESOURCE_COMPONENT_ID = "substrate_filesystem"


def build_component(*, settings: SiteSettings) -> ObjectStore:
    """Build the local directory object store for this process."""
    from resources.substrates.filesystem.config import (
        resolve_filesystem_substrate_settings,
    )
    from resources.substrates.filesystem.filesystem_substrate import (
        LocalDirectoryObjectStore,
    )

    return LocalDirectoryObjectStore(
        settings=resolve_filesystem_substrate_settings(settings),
    )
