"""S3 object store substrate exports."""

from resources.substrates.s3.component import RESOURCE_COMPONENT_ID
from resources.substrates.s3.config import (
    S3SubstrateSettings,
    resolve_s3_substrate_settings,
)
from resources.substrates.s3.s3_substrate import S3ObjectStore

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "S3ObjectStore",
    "S3SubstrateSettings",
    "resolve_s3_substrate_settings",
]
