"""Local directory substrate exports."""

from resources.substrates.filesystem.component import RESOURCE_COMPONENT_ID
from resources.substrates.filesystem.config import (
    FilesystemSubstrateSettings,
    resolve_filesystem_substrate_settings,
)
from resources.substrates.filesystem.filesystem_substrate import (
    LocalDirectoryObjectStore,
)

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "FilesystemSubstrateSettings",
    "LocalDirectoryObjectStore",
    "resolve_filesystem_substrate_settings",
]
