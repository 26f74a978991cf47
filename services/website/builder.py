"""Turn one stored object into a complete, validated HTTP response.

The whole object is buffered before anything is emitted: compression and the
ETag digest both need the complete body, and no status is committed until
they succeed. Memory use therefore grows with object size.
"""

from __future__ import annotations

import base64
import hashlib

from packages.website_shared.errors import (
    codes,
    dependency_error,
    internal_error,
)
from packages.website_shared.logging import fields, get_logger, log_context
from packages.website_shared.object_store import (
    LookupStatus,
    ObjectContent,
    ObjectStore,
)
from services.website.compression import (
    GZIP_ENCODING,
    accepts_gzip,
    gzip_encode,
    is_compressible,
)
from services.website.conditional import (
    ConditionalOutcome,
    evaluate_preconditions,
    http_date,
    validator_headers,
)
from services.website.config import WebsiteSettings
from services.website.content_type import resolve_content_type
from services.website.domain import WebsiteRequest, WebsiteResponse
from services.website.responses import (
    NOT_MODIFIED,
    PRECONDITION_FAILED,
    error_response,
    not_found_response,
)

_LOGGER = get_logger(__name__)

_GENERIC_FAILURE = "an error occurred"


def content_etag(data: bytes) -> str:
    """Return the quoted, unpadded base64 SHA-1 digest of ``data``."""
    digest = hashlib.sha1(data).digest()
    return '"' + base64.b64encode(digest).decode("ascii").rstrip("=") + '"'


class ResponseBuilder:
    """Fetch, encode and header one object for one request."""

    def __init__(self, *, store: ObjectStore, settings: WebsiteSettings) -> None:
        self._store = store
        self._settings = settings

    def build(self, *, key: str, request: WebsiteRequest) -> WebsiteResponse:
        """Return the response serving ``key`` for ``request``."""
        lookup = self._store.get_object(key)
        if lookup.status is LookupStatus.ABSENT:
            return not_found_response()
        if lookup.status is LookupStatus.ERROR:
            assert lookup.error is not None
            return error_response(lookup.error)
        assert lookup.value is not None
        return self._from_content(key=key, content=lookup.value, request=request)

    def _from_content(
        self, *, key: str, content: ObjectContent, request: WebsiteRequest
    ) -> WebsiteResponse:
        try:
            data = content.read_all()
        except Exception as exc:  # noqa: BLE001
            error = dependency_error(
                str(exc) or type(exc).__name__,
                code=codes.OBJECT_READ_FAILED,
                metadata={"exception_type": type(exc).__name__, "object_key": key},
            )
            with log_context({fields.ERROR_CODE: error.code}):
                _LOGGER.debug("object body read failed")
            return error_response(error)

        metadata = content.metadata
        content_type = resolve_content_type(
            reported=metadata.content_type,
            key=key,
            data=data,
            sniff=self._settings.sniff_content_type,
        )

        gzipped = is_compressible(content_type) and accepts_gzip(
            request.header("accept-encoding")
        )
        try:
            body = gzip_encode(data, level=self._settings.gzip_level) if gzipped else data
            etag = content_etag(body)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.exception("response encoding failed")
            return error_response(
                internal_error(
                    str(exc) or type(exc).__name__,
                    code=codes.ENCODING_FAILED,
                    metadata={"object_key": key},
                ),
                message=_GENERIC_FAILURE,
            )

        headers: dict[str, str] = {"ETag": etag}
        if gzipped:
            headers["Content-Encoding"] = GZIP_ENCODING
            headers["Vary"] = "Accept-Encoding"
        if content_type is not None:
            headers["Content-Type"] = content_type
        headers["Cache-Control"] = (
            metadata.cache_control or self._settings.default_cache_control
        )
        if metadata.last_modified is not None:
            headers["Last-Modified"] = http_date(metadata.last_modified)

        outcome = evaluate_preconditions(
            request=request,
            etag=etag,
            last_modified=metadata.last_modified,
        )
        if outcome is ConditionalOutcome.NOT_MODIFIED:
            return WebsiteResponse(status=NOT_MODIFIED, headers=validator_headers(headers))
        if outcome is ConditionalOutcome.PRECONDITION_FAILED:
            return WebsiteResponse(
                status=PRECONDITION_FAILED, headers=validator_headers(headers)
            )

        headers["Content-Length"] = str(len(body))
        return WebsiteResponse(status=200, headers=headers, body=body)
