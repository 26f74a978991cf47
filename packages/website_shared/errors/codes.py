"""Shared error code constants.

Codes are machine-readable and stable; substrate-specific detail (for example
the raw AWS error code) travels in ``ErrorDetail.metadata`` instead.
"""

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"

# Policy / authorization
PERMISSION_DENIED = "PERMISSION_DENIED"

# Dependency / object store
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
DEPENDENCY_TIMEOUT = "DEPENDENCY_TIMEOUT"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
OBJECT_STORE_ERROR = "OBJECT_STORE_ERROR"
OBJECT_READ_FAILED = "OBJECT_READ_FAILED"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
ENCODING_FAILED = "ENCODING_FAILED"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
