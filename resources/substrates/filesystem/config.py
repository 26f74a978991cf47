"""Pydantic settings for the local directory substrate."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

from packages.website_shared.config import SiteSettings, resolve_component_settings
from resources.substrates.filesystem.component import RESOURCE_COMPONENT_ID


class FilesystemSubstrateSettings(BaseModel):
    """Directory whose files are served as website objects."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_dir: str = "./public"

    @field_validator("root_dir")
    @classmethod
    def _validate_root_dir(cls, value: str) -> str:
        """Require a non-empty root directory path."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("root_dir is required")
        return normalized

    def root_path(self) -> Path:
        """Return the expanded root path for substrate operations."""
        return Path(self.root_dir).expanduser().resolve()


def resolve_filesystem_substrate_settings(
    settings: SiteSettings,
) -> FilesystemSubstrateSettings:
    """Resolve filesystem substrate settings from ``components.substrate.filesystem``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=FilesystemSubstrateSettings,
    )
