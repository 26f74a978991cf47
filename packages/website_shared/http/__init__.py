"""Public shared HTTP API for s3website packages."""

from .server import RawRequestData, create_app, read_raw_request, run_app

__all__ = [
    "RawRequestData",
    "create_app",
    "read_raw_request",
    "run_app",
]
