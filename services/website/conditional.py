"""Conditional request evaluation (RFC 7232) for fully prepared responses.

Precondition order follows the RFC: ``If-Match`` (or ``If-Unmodified-Since``
when absent) first, then ``If-None-Match`` (or ``If-Modified-Since`` for
GET/HEAD when absent). Range requests are not supported; a ``Range`` header is
ignored and the full representation is served.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from email.utils import format_datetime, parsedate_to_datetime
from enum import Enum

from services.website.domain import WebsiteRequest

_ETAG_PATTERN = re.compile(r'(W/)?"([^"]*)"')

# Representation headers dropped from a 304 (RFC 7232 section 4.1).
_NOT_MODIFIED_DROPPED = ("Content-Type", "Content-Length", "Content-Encoding")


class ConditionalOutcome(str, Enum):
    """Result of evaluating request preconditions."""

    PROCEED = "proceed"
    NOT_MODIFIED = "not_modified"
    PRECONDITION_FAILED = "precondition_failed"


def http_date(value: datetime) -> str:
    """Format one timestamp as an IMF-fixdate HTTP date."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return format_datetime(value.astimezone(UTC), usegmt=True)


def evaluate_preconditions(
    *,
    request: WebsiteRequest,
    etag: str | None,
    last_modified: datetime | None,
) -> ConditionalOutcome:
    """Evaluate validator headers against the current representation."""
    safe_method = request.method.upper() in {"GET", "HEAD"}

    if_match = request.header("if-match")
    if if_match is not None:
        if not _etag_list_matches(if_match, etag, weak=False):
            return ConditionalOutcome.PRECONDITION_FAILED
    else:
        unmodified_since = _parse_http_date(request.header("if-unmodified-since"))
        if (
            unmodified_since is not None
            and last_modified is not None
            and _truncate(last_modified) > unmodified_since
        ):
            return ConditionalOutcome.PRECONDITION_FAILED

    if_none_match = request.header("if-none-match")
    if if_none_match is not None:
        if _etag_list_matches(if_none_match, etag, weak=True):
            if safe_method:
                return ConditionalOutcome.NOT_MODIFIED
            return ConditionalOutcome.PRECONDITION_FAILED
        return ConditionalOutcome.PROCEED

    if safe_method:
        modified_since = _parse_http_date(request.header("if-modified-since"))
        if (
            modified_since is not None
            and last_modified is not None
            and _truncate(last_modified) <= modified_since
        ):
            return ConditionalOutcome.NOT_MODIFIED
    return ConditionalOutcome.PROCEED


def validator_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return the header set for a bodiless 304 or 412 response.

    Representation headers are removed; ``Last-Modified`` is dropped too when
    an ``ETag`` is present.
    """
    kept = {
        name: value
        for name, value in headers.items()
        if name not in _NOT_MODIFIED_DROPPED
    }
    if "ETag" in kept:
        kept.pop("Last-Modified", None)
    return kept


def _etag_list_matches(header: str, etag: str | None, *, weak: bool) -> bool:
    """Return whether ``etag`` matches any entry of an ETag list header."""
    if header.strip() == "*":
        return etag is not None
    if etag is None:
        return False
    current = _ETAG_PATTERN.fullmatch(etag)
    if current is None:
        return False
    current_weak, current_value = current.group(1) is not None, current.group(2)
    for match in _ETAG_PATTERN.finditer(header):
        candidate_weak, candidate_value = match.group(1) is not None, match.group(2)
        if candidate_value != current_value:
            continue
        if weak or not (candidate_weak or current_weak):
            return True
    return False


def _parse_http_date(value: str | None) -> datetime | None:
    """Parse one HTTP date header, returning ``None`` when invalid."""
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _truncate(value: datetime) -> datetime:
    """Drop sub-second precision, which HTTP dates cannot express."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.replace(microsecond=0)
