"""Content-Type resolution for served objects."""

from __future__ import annotations

import mimetypes
from pathlib import PurePosixPath

# Web asset types that the platform table lacks or reports inconsistently.
_EXTENSION_OVERRIDES: dict[str, str] = {
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".json": "application/json",
    ".map": "application/json",
    ".svg": "image/svg+xml",
    ".wasm": "application/wasm",
    ".webmanifest": "application/manifest+json",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".eot": "application/vnd.ms-fontobject",
    ".gz": "application/gzip",
    ".tgz": "application/gzip",
    ".svgz": "image/svg+xml",
}

_BINARY_CONTROL_BYTES = frozenset(
    [*range(0x00, 0x09), 0x0B, *range(0x0E, 0x1B), *range(0x1C, 0x20)]
)

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"wOFF", "font/woff"),
    (b"wOF2", "font/woff2"),
    (b"\x00asm", "application/wasm"),
    (b"OggS\x00", "application/ogg"),
)

_HTML_PREFIXES: tuple[bytes, ...] = (
    b"<!doctype html",
    b"<html",
    b"<head",
    b"<body",
    b"<script",
    b"<title",
    b"<style",
    b"<div",
    b"<p",
)

_SNIFF_LENGTH = 512


def resolve_content_type(
    *,
    reported: str | None,
    key: str,
    data: bytes,
    sniff: bool = False,
) -> str | None:
    """Pick the Content-Type for one object.

    Order: the store-reported value, then the key's file extension, then (when
    ``sniff`` is enabled) well-known leading byte signatures. ``None`` means
    the type is unknown and no header should be sent.
    """
    if reported and reported.strip():
        return reported.strip()
    guessed = content_type_for_key(key)
    if guessed is not None:
        return guessed
    if sniff:
        return sniff_content_type(data)
    return None


def content_type_for_key(key: str) -> str | None:
    """Guess a Content-Type from the extension of the key's last segment."""
    suffix = PurePosixPath(key).suffix.lower()
    if suffix == "":
        return None
    override = _EXTENSION_OVERRIDES.get(suffix)
    if override is not None:
        return override
    guessed, encoding = mimetypes.guess_type(f"object{suffix}", strict=False)
    if encoding is not None:
        return None
    return guessed


def sniff_content_type(data: bytes) -> str | None:
    """Detect a handful of unambiguous formats from the leading bytes."""
    head = data[:_SNIFF_LENGTH]
    if head == b"":
        return None

    for signature, detected in _SIGNATURES:
        if head.startswith(signature):
            return detected
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"

    text = head.lstrip(b"\t\n\x0c\r ")
    lowered = text.lower()
    if lowered.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"
    if lowered.startswith(b"<!--") or any(
        _starts_with_tag(lowered, prefix) for prefix in _HTML_PREFIXES
    ):
        return "text/html; charset=utf-8"
    if not any(byte in _BINARY_CONTROL_BYTES for byte in head):
        return "text/plain; charset=utf-8"
    return None


def _starts_with_tag(data: bytes, prefix: bytes) -> bool:
    """Match an opening tag name followed by a space or ``>``."""
    return data.startswith(prefix) and data[len(prefix) : len(prefix) + 1] in (
        b" ",
        b">",
    )
