"""S3-backed object store built on a boto3 client."""

from __future__ import annotations

from typing import Any, Mapping

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from packages.website_shared.errors import (
    ErrorDetail,
    codes,
    dependency_error,
    policy_error,
)
from packages.website_shared.logging import get_logger, log_context
from packages.website_shared.object_store import (
    ObjectContent,
    ObjectMetadata,
    StoreHealthStatus,
    StoreLookup,
)
from resources.substrates.s3.config import S3SubstrateSettings

_LOGGER = get_logger(__name__)

# HeadObject reports a bare 404 because HEAD responses carry no error body.
_ABSENT_CODES = frozenset({"404", "NotFound", "NoSuchKey"})
_DENIED_CODES = frozenset({"403", "AccessDenied", "Forbidden"})


class S3ObjectStore:
    """Read website objects from one S3 (or S3-compatible) bucket."""

    def __init__(self, *, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    @classmethod
    def from_settings(cls, settings: S3SubstrateSettings) -> "S3ObjectStore":
        """Build a boto3 client from profile, region and transport settings."""
        session = boto3.session.Session(
            profile_name=settings.profile,
            region_name=settings.region,
        )
        client = session.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            config=Config(
                connect_timeout=settings.connect_timeout_seconds,
                read_timeout=settings.read_timeout_seconds,
                retries={"max_attempts": settings.max_attempts, "mode": "standard"},
            ),
        )
        return cls(client=client, bucket=settings.bucket)

    def head_object(self, key: str) -> StoreLookup[ObjectMetadata]:
        """Return object metadata, ABSENT for missing keys, ERROR otherwise."""
        if key == "":
            return StoreLookup.absent()
        try:
            response = self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in _ABSENT_CODES:
                return StoreLookup.absent()
            return StoreLookup.failed(_client_error(exc, operation="head_object", key=key))
        except BotoCoreError as exc:
            return StoreLookup.failed(_transport_error(exc, operation="head_object", key=key))
        return StoreLookup.found(_metadata(response))

    def get_object(self, key: str) -> StoreLookup[ObjectContent]:
        """Return metadata plus the streaming body for one object."""
        if key == "":
            return StoreLookup.absent()
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in _ABSENT_CODES:
                return StoreLookup.absent()
            return StoreLookup.failed(_client_error(exc, operation="get_object", key=key))
        except BotoCoreError as exc:
            return StoreLookup.failed(_transport_error(exc, operation="get_object", key=key))
        return StoreLookup.found(
            ObjectContent(metadata=_metadata(response), body=response["Body"])
        )

    def health(self) -> StoreHealthStatus:
        """Return readiness based on a ``HeadBucket`` probe."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError as exc:
            return StoreHealthStatus(
                ready=False,
                detail=f"head_bucket failed: {_error_code(exc) or type(exc).__name__}",
            )
        except BotoCoreError as exc:
            return StoreHealthStatus(
                ready=False,
                detail=f"head_bucket failed: {type(exc).__name__}",
            )
        return StoreHealthStatus(ready=True, detail="ok")


def _metadata(response: Mapping[str, Any]) -> ObjectMetadata:
    """Map one HeadObject/GetObject response onto ``ObjectMetadata``."""
    return ObjectMetadata(
        content_type=response.get("ContentType") or None,
        content_length=response.get("ContentLength"),
        last_modified=response.get("LastModified"),
        cache_control=response.get("CacheControl") or None,
    )


def _error_code(exc: ClientError) -> str:
    """Return the AWS error code carried by one ``ClientError``."""
    return str(exc.response.get("Error", {}).get("Code", ""))


def _client_error(exc: ClientError, *, operation: str, key: str) -> ErrorDetail:
    """Translate one non-absence ``ClientError`` into a shared error."""
    code = _error_code(exc)
    metadata = {"aws_error_code": code, "operation": operation, "object_key": key}
    with log_context({"aws_error_code": code, "operation": operation}):
        _LOGGER.debug("S3 request failed")
    if code in _DENIED_CODES:
        return policy_error(str(exc), metadata=metadata)
    return dependency_error(str(exc), code=codes.OBJECT_STORE_ERROR, metadata=metadata)


def _transport_error(exc: BotoCoreError, *, operation: str, key: str) -> ErrorDetail:
    """Translate one botocore transport failure into a shared error."""
    with log_context(
        {"exception_type": type(exc).__name__, "operation": operation}
    ):
        _LOGGER.debug("S3 transport failure")
    return dependency_error(
        str(exc),
        code=codes.DEPENDENCY_UNAVAILABLE,
        metadata={
            "exception_type": type(exc).__name__,
            "operation": operation,
            "object_key": key,
        },
    )
