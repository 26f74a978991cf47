"""Pydantic settings for the S3 object store substrate."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.website_shared.config import SiteSettings, resolve_component_settings
from resources.substrates.s3.component import RESOURCE_COMPONENT_ID


class S3SubstrateSettings(BaseModel):
    """Bucket, credentials profile and client transport settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bucket: str = Field(default="", validate_default=True)
    region: str = "us-east-1"
    profile: str | None = None
    endpoint_url: str | None = None
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    read_timeout_seconds: float = Field(default=60.0, gt=0)
    max_attempts: int = Field(default=3, gt=0)

    @field_validator("bucket")
    @classmethod
    def _validate_bucket(cls, value: str) -> str:
        """Require a non-empty bucket name."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("bucket is required")
        return normalized

    @field_validator("region")
    @classmethod
    def _validate_region(cls, value: str) -> str:
        """Require a non-empty region name."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("region is required")
        return normalized

    @field_validator("profile", "endpoint_url")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        """Treat blank optional strings as unset."""
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None


def resolve_s3_substrate_settings(settings: SiteSettings) -> S3SubstrateSettings:
    """Resolve S3 substrate settings from ``components.substrate.s3``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=S3SubstrateSettings,
    )
