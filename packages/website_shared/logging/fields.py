"""Canonical logging field names shared by s3website components."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Request fields.
REQUEST_PATH = "request_path"
METHOD = "method"
OBJECT_KEY = "object_key"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
ERROR_CODE = "error_code"

# Common process-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
