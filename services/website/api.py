"""FastAPI routes exposing the website service over HTTP."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response

from packages.website_shared.http import create_app, read_raw_request
from services.website.domain import WebsiteRequest
from services.website.service import WebsiteService

_APP_VERSION = "0.1.0"


def register_routes(*, app: FastAPI, service: WebsiteService) -> None:
    """Register the catch-all GET/HEAD route serving website objects."""

    @app.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
    def serve_object(request: Request) -> Response:
        raw = read_raw_request(request)
        result = service.serve(
            request=WebsiteRequest(path=raw.path, method=raw.method, headers=raw.headers)
        )
        return Response(
            content=result.body,
            status_code=result.status,
            headers=dict(result.headers),
        )


def create_website_app(*, service: WebsiteService) -> FastAPI:
    """Create the ASGI app serving ``service``."""
    app = create_app(title="s3website", version=_APP_VERSION)
    register_routes(app=app, service=service)
    return app
