"""Service error hierarchy for attribute operations.

This module defines the exception hierarchy for service-level errors:
- ServiceError: Base for all service errors
- TransientError: Retryable errors (store connectivity, timeouts)
- PermanentError: Non-retryable errors (validation, missing documents)

Every concrete error carries a stable ``code`` that hosts (GraphQL, CLI)
report to callers.
"""


class ServiceError(Exception):
    """Base exception for all service errors."""

    code = "SERVICE_ERROR"


class TransientError(ServiceError):
    """Transient error that may succeed on retry.

    Examples:
    - Store server selection timeout
    - Network timeout or connection reset
    """

    pass


class PermanentError(ServiceError):
    """Permanent error that will not succeed on retry.

    Examples:
    - Required input field missing or empty
    - Update or delete of an identifier that does not exist
    """

    pass


class ValidationError(PermanentError):
    """Input failed validation (missing/empty required field, bad arguments).

    Args:
        message: Human-readable summary
        errors: Mapping of field name to validation message
    """

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class NotFoundError(PermanentError):
    """Referenced attribute does not exist."""

    code = "NOT_FOUND"

    def __init__(self, attribute_id: str):
        super().__init__(f"Attribute not found: {attribute_id}")
        self.attribute_id = attribute_id


class StoreUnavailableError(TransientError):
    """Document store could not be reached, rejected our credentials or timed out."""

    code = "STORE_UNAVAILABLE"
