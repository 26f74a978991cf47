"""Concrete website service composing the resolver and response builder."""

from __future__ import annotations

from dataclasses import replace

from packages.website_shared.logging import (
    fields,
    get_logger,
    log_context,
    public_api_logged,
)
from packages.website_shared.object_store import ObjectStore
from services.website.builder import ResponseBuilder
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
from services.website.resolver import WebsiteResolver
from services.website.responses import (
    NOT_MODIFIED,
    error_response,
    not_found_response,
    redirect_response,
)
from services.website.service import WebsiteService

_LOGGER = get_logger(__name__)


class DefaultWebsiteService(WebsiteService):
    """Stateless website service; safe to share across concurrent requests."""

    def __init__(self, *, settings: WebsiteSettings, store: ObjectStore) -> None:
        self._store = store
        self._resolver = WebsiteResolver(
            store=store,
            index_document=settings.index_document,
            redirect_status=settings.redirect_status,
        )
        self._builder = ResponseBuilder(store=store, settings=settings)

    @public_api_logged(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("request.path", "request.method"),
    )
    def serve(self, *, request: WebsiteRequest) -> WebsiteResponse:
        """Resolve ``request.path`` and build the matching response."""
        with log_context(
            {fields.REQUEST_PATH: request.path, fields.METHOD: request.method}
        ):
            action = self._resolver.resolve(request.path)
            response = self._respond(action=action, request=request)
            return _finalize(response=response, request=request)

    @public_api_logged(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def resolve(self, *, path: str) -> ResolvedAction:
        """Return the resolution for ``path`` without fetching content."""
        return self._resolver.resolve(path)

    @public_api_logged(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def health(self) -> HealthStatus:
        """Return readiness derived from the object store probe."""
        store_status = self._store.health()
        return HealthStatus(
            service_ready=True,
            store_ready=store_status.ready,
            detail=store_status.detail,
        )

    def _respond(
        self, *, action: ResolvedAction, request: WebsiteRequest
    ) -> WebsiteResponse:
        """Map one resolved action onto its response."""
        if isinstance(action, Serve):
            with log_context({fields.OBJECT_KEY: action.key}):
                response = self._builder.build(key=action.key, request=request)
                if response.status == 404:
                    _LOGGER.debug("object not found")
                return response
        if isinstance(action, RedirectTo):
            return redirect_response(
                location=action.location,
                status=action.status,
                method=request.method,
            )
        if isinstance(action, Failed):
            return error_response(action.error)
        if isinstance(action, NotFound):
            _LOGGER.debug("no object or directory index for path")
            return not_found_response()
        raise TypeError(f"unsupported resolved action: {action!r}")


def _finalize(*, response: WebsiteResponse, request: WebsiteRequest) -> WebsiteResponse:
    """Set Content-Length and strip the body for HEAD requests."""
    headers = dict(response.headers)
    if response.status != NOT_MODIFIED and "Content-Length" not in headers:
        headers["Content-Length"] = str(len(response.body))
    body = b"" if request.is_head else response.body
    return replace(response, headers=headers, body=body)

