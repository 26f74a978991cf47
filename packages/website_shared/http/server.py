"""FastAPI and uvicorn helpers shared by HTTP-facing components."""

from __future__ import annotations

from dataclasses import dataclass

import uvicorn
from fastapi import FastAPI, Request


@dataclass(frozen=True)
class RawRequestData:
    """Method, decoded path and lower-cased header mapping of one request."""

    method: str
    path: str
    headers: dict[str, str]


def create_app(*, title: str = "s3website", version: str = "0.0.0") -> FastAPI:
    """Create a FastAPI app with project defaults.

    Interactive docs and the OpenAPI schema are disabled because every path
    belongs to the served website.
    """
    return FastAPI(
        title=title,
        version=version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )


def run_app(
    app: FastAPI,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    log_level: str = "info",
) -> None:
    """Run one FastAPI app through uvicorn."""
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def read_raw_request(request: Request) -> RawRequestData:
    """Capture method, path and headers for transport-neutral handling.

    Repeated headers are joined with ``", "`` as HTTP list semantics allow.
    """
    headers: dict[str, str] = {}
    for name, value in request.headers.items():
        key = name.lower()
        headers[key] = f"{headers[key]}, {value}" if key in headers else value
    return RawRequestData(
        method=request.method.upper(),
        path=request.scope.get("path") or "/",
        headers=headers,
    )
