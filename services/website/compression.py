"""Gzip negotiation for compressible website content."""

from __future__ import annotations

import gzip

GZIP_ENCODING = "gzip"

COMPRESSIBLE_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "application/eot",
        "application/font",
        "application/font-sfnt",
        "application/javascript",
        "application/json",
        "application/opentype",
        "application/otf",
        "application/pkcs7-mime",
        "application/truetype",
        "application/ttf",
        "application/vnd.ms-fontobject",
        "application/x-font-opentype",
        "application/x-font-truetype",
        "application/x-font-ttf",
        "application/x-httpd-cgi",
        "application/x-javascript",
        "application/x-mpegurl",
        "application/x-opentype",
        "application/x-otf",
        "application/x-perl",
        "application/x-ttf",
        "application/xhtml+xml",
        "application/xml",
        "application/xml+rss",
        "font/eot",
        "font/opentype",
        "font/otf",
        "font/ttf",
        "image/svg+xml",
        "text/css",
        "text/csv",
        "text/html",
        "text/javascript",
        "text/js",
        "text/plain",
        "text/richtext",
        "text/tab-separated-values",
        "text/x-component",
        "text/x-java-source",
        "text/x-script",
        "text/xml",
    }
)


def media_type(content_type: str) -> str:
    """Return the media type of a Content-Type value without parameters."""
    return content_type.split(";", 1)[0].strip().lower()


def is_compressible(content_type: str | None) -> bool:
    """Return whether ``content_type`` belongs to the compressible set."""
    if not content_type:
        return False
    return media_type(content_type) in COMPRESSIBLE_CONTENT_TYPES


def accepts_gzip(accept_encoding: str | None) -> bool:
    """Return whether an ``Accept-Encoding`` value lists the ``gzip`` token.

    Tokens are compared exactly after trimming, so ``gzip;q=0.5`` or ``GZIP``
    do not qualify.
    """
    if not accept_encoding:
        return False
    return any(token.strip() == GZIP_ENCODING for token in accept_encoding.split(","))


def gzip_encode(data: bytes, *, level: int = 6) -> bytes:
    """Gzip ``data`` with a zero header mtime so equal input yields equal output."""
    return gzip.compress(data, compresslevel=level, mtime=0)
