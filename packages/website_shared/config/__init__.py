"""Public API for shared s3website configuration utilities."""

from .loader import load_settings
from .models import (
    AWS_ENVIRONMENT_FALLBACKS,
    DEFAULT_CONFIG_PATH,
    ComponentsSettings,
    LoggingSettings,
    ServerSettings,
    SiteSettings,
    resolve_component_settings,
)

__all__ = [
    "AWS_ENVIRONMENT_FALLBACKS",
    "DEFAULT_CONFIG_PATH",
    "ComponentsSettings",
    "LoggingSettings",
    "ServerSettings",
    "SiteSettings",
    "load_settings",
    "resolve_component_settings",
]
