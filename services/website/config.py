"""Pydantic settings for website resolution and response policy."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.website_shared.config import SiteSettings, resolve_component_settings
from services.website.component import SERVICE_COMPONENT_ID


class WebsiteSettings(BaseModel):
    """Static website hosting behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: Literal["s3", "filesystem"] = "s3"
    index_document: str = "index.html"
    redirect_status: Literal[301, 302, 303, 307, 308] = 302
    default_cache_control: str = "max-age=60"
    gzip_level: int = Field(default=6, ge=1, le=9)
    sniff_content_type: bool = False

    @field_validator("index_document")
    @classmethod
    def _validate_index_document(cls, value: str) -> str:
        """Require a bare document name such as ``index.html``."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("index_document is required")
        if "/" in normalized:
            raise ValueError("index_document must not contain '/'")
        return normalized

    @field_validator("default_cache_control")
    @classmethod
    def _validate_default_cache_control(cls, value: str) -> str:
        """Require a non-empty Cache-Control directive."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("default_cache_control is required")
        return normalized


def resolve_website_settings(settings: SiteSettings) -> WebsiteSettings:
    """Resolve website settings from ``components.service.website``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=WebsiteSettings,
    )
