"""Behavior tests for response construction from stored objects."""

from __future__ import annotations

import base64
import gzip
import hashlib
import io
from datetime import UTC, datetime

import pytest

from packages.website_shared.errors import dependency_error
from packages.website_shared.object_store import (
    ObjectContent,
    ObjectMetadata,
    StoreHealthStatus,
    StoreLookup,
)
from services.website import builder as builder_module
from services.website.builder import ResponseBuilder, content_etag
from services.website.config import WebsiteSettings
from services.website.domain import WebsiteRequest

_MODIFIED = datetime(2024, 5, 1, 12, 0, 30, 250000, tzinfo=UTC)
_HTML = b"<!doctype html><html><body>" + b"hello world " * 50 + b"</body></html>"


class _ExplodingBody:
    """Body stream whose read fails mid-transfer."""

    def __init__(self) -> None:
        self.closed = False

    def read(self) -> bytes:
        raise ConnectionError("connection reset by peer")

    def close(self) -> None:
        self.closed = True


class _FakeObjectStore:
    """In-memory content store fake for builder tests."""

    def __init__(self) -> None:
        self.objects: dict[str, tuple[ObjectMetadata, bytes]] = {}
        self.bodies: dict[str, object] = {}
        self.failing: set[str] = set()

    def put(self, key: str, data: bytes, **metadata: object) -> None:
        self.objects[key] = (ObjectMetadata(**metadata), data)

    def head_object(self, key: str) -> StoreLookup[ObjectMetadata]:
        raise AssertionError(f"builder must not issue metadata lookups: {key}")

    def get_object(self, key: str) -> StoreLookup[ObjectContent]:
        if key in self.failing:
            return StoreLookup.failed(dependency_error("RequestTimeout: slow"))
        if key in self.bodies:
            return StoreLookup.found(
                ObjectContent(metadata=ObjectMetadata(), body=self.bodies[key])
            )
        if key not in self.objects:
            return StoreLookup.absent()
        metadata, data = self.objects[key]
        return StoreLookup.found(ObjectContent(metadata=metadata, body=io.BytesIO(data)))

    def health(self) -> StoreHealthStatus:
        return StoreHealthStatus(ready=True, detail="ok")


def _builder(store: _FakeObjectStore, **settings: object) -> ResponseBuilder:
    return ResponseBuilder(store=store, settings=WebsiteSettings(**settings))


def _request(**headers: str) -> WebsiteRequest:
    return WebsiteRequest(
        path="/",
        headers={name.replace("_", "-").lower(): value for name, value in headers.items()},
    )


def test_content_etag_is_quoted_unpadded_sha1() -> None:
    """ETag should be the quoted base64 SHA-1 digest without padding."""
    expected = base64.b64encode(hashlib.sha1(b"abc").digest()).decode().rstrip("=")

    assert content_etag(b"abc") == f'"{expected}"'
    assert "=" not in content_etag(b"abc")


def test_serves_store_content_type_and_default_cache_control() -> None:
    """Store metadata content type wins and cache control defaults to 60s."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")

    response = _builder(store).build(key="index.html", request=_request())

    assert response.status == 200
    assert response.body == _HTML
    assert response.headers["Content-Type"] == "text/html"
    assert response.headers["Cache-Control"] == "max-age=60"
    assert response.headers["ETag"] == content_etag(_HTML)
    assert response.headers["Content-Length"] == str(len(_HTML))
    assert "Content-Encoding" not in response.headers
    assert "Vary" not in response.headers


def test_store_cache_control_is_used_verbatim() -> None:
    """A stored Cache-Control directive should replace the default."""
    store = _FakeObjectStore()
    store.put(
        "app.css",
        b"body{}",
        content_type="text/css",
        cache_control="public, max-age=31536000, immutable",
    )

    response = _builder(store).build(key="app.css", request=_request())

    assert response.headers["Cache-Control"] == "public, max-age=31536000, immutable"


def test_content_type_falls_back_to_extension() -> None:
    """Without a stored type the key's extension should decide."""
    store = _FakeObjectStore()
    store.put("styles/site.css", b"a{}")

    response = _builder(store).build(key="styles/site.css", request=_request())

    assert response.headers["Content-Type"] == "text/css"


def test_unknown_content_type_sends_no_header() -> None:
    """Unknown types should omit Content-Type rather than guess a default."""
    store = _FakeObjectStore()
    store.put("LICENSE", b"MIT License")

    response = _builder(store).build(key="LICENSE", request=_request())

    assert response.status == 200
    assert "Content-Type" not in response.headers


def test_sniffing_detects_html_when_enabled() -> None:
    """Sniffing is opt-in and only applies when other sources are silent."""
    store = _FakeObjectStore()
    store.put("about", b"  <!DOCTYPE html><p>hi</p>")

    response = _builder(store, sniff_content_type=True).build(
        key="about", request=_request()
    )

    assert response.headers["Content-Type"] == "text/html; charset=utf-8"


def test_compressible_type_with_gzip_is_compressed() -> None:
    """Compression law: gzip body, encoding/vary headers, hash of gzip bytes."""
    store = _FakeObjectStore()
    store.put("app.js", _HTML, content_type="application/javascript")

    response = _builder(store).build(
        key="app.js", request=_request(accept_encoding="gzip, deflate")
    )

    assert response.headers["Content-Encoding"] == "gzip"
    assert response.headers["Vary"] == "Accept-Encoding"
    assert gzip.decompress(response.body) == _HTML
    assert response.headers["ETag"] == content_etag(response.body)
    assert response.headers["ETag"] != content_etag(_HTML)


def test_content_type_parameters_are_ignored_for_compression() -> None:
    """Media type parameters such as charset should not block compression."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html; charset=utf-8")

    response = _builder(store).build(
        key="index.html", request=_request(accept_encoding="gzip")
    )

    assert response.headers["Content-Encoding"] == "gzip"
    assert response.headers["Content-Type"] == "text/html; charset=utf-8"


def test_non_compressible_type_is_untouched() -> None:
    """Binary types should pass through even when gzip is accepted."""
    png = b"\x89PNG\r\n\x1a\n" + bytes(64)
    store = _FakeObjectStore()
    store.put("logo.png", png, content_type="image/png")

    response = _builder(store).build(
        key="logo.png", request=_request(accept_encoding="gzip")
    )

    assert response.body == png
    assert "Content-Encoding" not in response.headers
    assert "Vary" not in response.headers


def test_gzip_token_must_match_exactly() -> None:
    """Quality-suffixed or differently cased tokens do not enable gzip."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")
    builder = _builder(store)

    for header in ("gzip;q=1.0", "GZIP", "deflate, br", "x-gzip"):
        response = builder.build(key="index.html", request=_request(accept_encoding=header))
        assert "Content-Encoding" not in response.headers, header


def test_compressed_responses_are_deterministic() -> None:
    """Repeated compressed responses should be byte-identical."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")
    builder = _builder(store)
    request = _request(accept_encoding="gzip")

    first = builder.build(key="index.html", request=request)
    second = builder.build(key="index.html", request=request)

    assert first.body == second.body
    assert first.headers == second.headers


def test_zero_length_object_is_valid() -> None:
    """Empty objects should still produce a 200 with an ETag."""
    store = _FakeObjectStore()
    store.put("empty.txt", b"", content_type="text/plain", content_length=0)

    response = _builder(store).build(key="empty.txt", request=_request())

    assert response.status == 200
    assert response.body == b""
    assert response.headers["ETag"] == content_etag(b"")
    assert response.headers["Content-Length"] == "0"


def test_absent_object_is_not_found() -> None:
    """Absence at fetch time should produce a 404."""
    response = _builder(_FakeObjectStore()).build(
        key="docs/index.html", request=_request()
    )

    assert response.status == 404
    assert response.body == b"404 page not found\n"


def test_store_error_is_500_with_message() -> None:
    """Store errors should surface their message in a 500 body."""
    store = _FakeObjectStore()
    store.failing.add("index.html")

    response = _builder(store).build(key="index.html", request=_request())

    assert response.status == 500
    assert response.body == b"RequestTimeout: slow\n"
    assert response.errors[0].message == "RequestTimeout: slow"
    assert "ETag" not in response.headers


def test_body_read_failure_is_500_and_closes_stream() -> None:
    """A failed transfer should never yield a success status."""
    body = _ExplodingBody()
    store = _FakeObjectStore()
    store.bodies["index.html"] = body

    response = _builder(store).build(key="index.html", request=_request())

    assert response.status == 500
    assert b"connection reset by peer" in response.body
    assert body.closed is True


def test_last_modified_header_uses_http_date() -> None:
    """Last-Modified should be formatted as an IMF-fixdate."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html", last_modified=_MODIFIED)

    response = _builder(store).build(key="index.html", request=_request())

    assert response.headers["Last-Modified"] == "Wed, 01 May 2024 12:00:30 GMT"


def test_if_none_match_with_current_etag_is_not_modified() -> None:
    """Revalidation with the current ETag should short-circuit to 304."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html", last_modified=_MODIFIED)
    builder = _builder(store)
    etag = builder.build(key="index.html", request=_request()).headers["ETag"]

    response = builder.build(key="index.html", request=_request(if_none_match=etag))

    assert response.status == 304
    assert response.body == b""
    assert response.headers["ETag"] == etag
    assert response.headers["Cache-Control"] == "max-age=60"
    assert "Content-Type" not in response.headers
    assert "Content-Length" not in response.headers
    assert "Last-Modified" not in response.headers


def test_uncompressed_etag_does_not_validate_gzip_representation() -> None:
    """Each representation has its own validator."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")
    builder = _builder(store)
    plain_etag = builder.build(key="index.html", request=_request()).headers["ETag"]

    response = builder.build(
        key="index.html",
        request=_request(accept_encoding="gzip", if_none_match=plain_etag),
    )

    assert response.status == 200
    assert response.headers["Content-Encoding"] == "gzip"


def test_if_modified_since_not_modified() -> None:
    """A date at or after Last-Modified (to the second) should yield 304."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html", last_modified=_MODIFIED)

    response = _builder(store).build(
        key="index.html",
        request=_request(if_modified_since="Wed, 01 May 2024 12:00:30 GMT"),
    )

    assert response.status == 304


def test_if_match_mismatch_is_precondition_failed() -> None:
    """A failed If-Match should produce a bodiless 412."""
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")

    response = _builder(store).build(
        key="index.html", request=_request(if_match='"stale"')
    )

    assert response.status == 412
    assert response.body == b""


def test_encoding_failure_is_generic_500(monkeypatch: pytest.MonkeyPatch) -> None:
    """Compression failures should hide internals behind a generic message."""

    def broken_gzip(data: bytes, *, level: int = 6) -> bytes:
        raise RuntimeError("zlib stream error")

    monkeypatch.setattr(builder_module, "gzip_encode", broken_gzip)
    store = _FakeObjectStore()
    store.put("index.html", _HTML, content_type="text/html")

    response = _builder(store).build(
        key="index.html", request=_request(accept_encoding="gzip")
    )

    assert response.status == 500
    assert response.body == b"an error occurred\n"
    assert response.errors[0].code == "ENCODING_FAILED"
    assert "zlib" in response.errors[0].message
