"""Plain-text, redirect and error responses produced outside object serving."""

from __future__ import annotations

from html import escape
from urllib.parse import quote

from packages.website_shared.errors import ErrorDetail
from services.website.domain import WebsiteResponse

_TEXT_PLAIN = "text/plain; charset=utf-8"
_TEXT_HTML = "text/html; charset=utf-8"
_LOCATION_SAFE = "/!$&'()*+,;=:@~-._"

NOT_FOUND_BODY = b"404 page not found\n"
PRECONDITION_FAILED = 412
NOT_MODIFIED = 304


def not_found_response() -> WebsiteResponse:
    """Return the 404 response for paths no object backs."""
    return WebsiteResponse(
        status=404,
        headers={
            "Content-Type": _TEXT_PLAIN,
            "X-Content-Type-Options": "nosniff",
        },
        body=NOT_FOUND_BODY,
    )


def error_response(error: ErrorDetail, *, message: str | None = None) -> WebsiteResponse:
    """Return a 500 whose body is ``message`` or the error's own message."""
    text = message if message is not None else error.message
    return WebsiteResponse(
        status=500,
        headers={
            "Content-Type": _TEXT_PLAIN,
            "X-Content-Type-Options": "nosniff",
        },
        body=f"{text}\n".encode("utf-8"),
        errors=(error,),
    )


def redirect_response(*, location: str, status: int, method: str) -> WebsiteResponse:
    """Return a redirect to ``location`` with a short HTML body for GET."""
    encoded = quote(location, safe=_LOCATION_SAFE)
    headers = {"Location": encoded}
    body = b""
    if method.upper() == "GET":
        headers["Content-Type"] = _TEXT_HTML
        body = f'<a href="{escape(encoded)}">{_reason(status)}</a>.\n'.encode("utf-8")
    return WebsiteResponse(status=status, headers=headers, body=body)


def _reason(status: int) -> str:
    return {
        301: "Moved Permanently",
        302: "Found",
        303: "See Other",
        307: "Temporary Redirect",
        308: "Permanent Redirect",
    }.get(status, "Found")
