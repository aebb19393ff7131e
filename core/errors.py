"""
Shared error types for core services.
"""

ERROR_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_NOT_FOUND = "NOT_FOUND"
ERROR_VALIDATION = "VALIDATION_ERROR"


class ServiceIssue(Exception):
    """Base class for failures surfaced to the caller with a stable code."""

    default_code = ERROR_VALIDATION

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        error_type: str = "invalid",
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.field = field
        self.error_type = error_type
        self.error_code = error_code or self.default_code


class ValidationIssue(ServiceIssue, ValueError):
    default_code = ERROR_VALIDATION


class NotFound(ServiceIssue, LookupError):
    default_code = ERROR_NOT_FOUND

    def __init__(self, message: str, field: str = "id", **kwargs):
        kwargs.setdefault("error_type", "not_found")
        super().__init__(message, field=field, **kwargs)


class Unauthorized(ServiceIssue):
    default_code = ERROR_UNAUTHORIZED

    def __init__(self, message: str = "You must be signed in to perform this action.", **kwargs):
        kwargs.setdefault("field", "user")
        kwargs.setdefault("error_type", "unauthorized")
        super().__init__(message, **kwargs)
