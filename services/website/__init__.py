"""Website service package exports."""

from services.website.component import SERVICE_COMPONENT_ID
from services.website.config import WebsiteSettings
from services.website.domain import (
    Failed,
    HealthStatus,
    NotFound,
    RedirectTo,
    ResolvedAction,
    Serve,
    WebsiteRequest,
    WebsiteResponse,
)
from services.website.implementation import DefaultWebsiteService
from services.website.service import WebsiteService, build_website_service

__all__ = [
    "SERVICE_COMPONENT_ID",
    "DefaultWebsiteService",
    "Failed",
    "HealthStatus",
    "NotFound",
    "RedirectTo",
    "ResolvedAction",
    "Serve",
    "WebsiteRequest",
    "WebsiteResponse",
    "WebsiteService",
    "WebsiteSettings",
    "build_website_service",
]
