"""Error taxonomy for the food catalogue and restaurant directory services.

Every failure carries a stable ``code``, an HTTP status for the API layer and a
``retryable`` flag so callers can tell "restaurant does not exist" apart from
"could not reach a dependency".
"""

from typing import Any


class CatalogueServiceError(Exception):
    """Base exception for all catalogue service errors."""

    code = "INTERNAL_ERROR"
    status_code = 500
    retryable = False

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for an API response body."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class InvalidRestaurantIdError(CatalogueServiceError):
    """Raised when a restaurant identifier is absent or not a positive integer."""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, restaurant_id: Any) -> None:
        super().__init__(
            message=f"Invalid restaurant id: {restaurant_id!r}",
            details={"restaurant_id": repr(restaurant_id)},
        )


class StoreUnavailableError(CatalogueServiceError):
    """Raised when the persistence layer cannot be reached."""

    code = "STORE_UNAVAILABLE"
    status_code = 503
    retryable = True

    def __init__(self, operation: str, error: str) -> None:
        super().__init__(
            message=f"Store unavailable during {operation}",
            details={"operation": operation, "error": error},
        )


class InvalidStoredRecordError(CatalogueServiceError):
    """Raised when a stored row cannot be decoded into its model."""

    code = "STORE_RECORD_INVALID"
    status_code = 500

    def __init__(self, operation: str, error: str) -> None:
        super().__init__(
            message=f"Invalid record returned by {operation}",
            details={"operation": operation, "error": error},
        )


class PageAssemblyError(CatalogueServiceError):
    """Base for directory failures that prevent a catalogue page from being built."""


class RestaurantNotFoundError(PageAssemblyError):
    """Raised when the directory reports no such restaurant."""

    code = "RESTAURANT_NOT_FOUND"
    status_code = 404

    def __init__(self, restaurant_id: int) -> None:
        super().__init__(
            message=f"Restaurant not found: {restaurant_id}",
            details={"restaurant_id": restaurant_id},
        )


class ServiceUnavailableError(PageAssemblyError):
    """Raised when no healthy instance of a service can be reached."""

    code = "SERVICE_UNAVAILABLE"
    status_code = 503
    retryable = True

    def __init__(self, service_name: str, reason: str) -> None:
        super().__init__(
            message=f"Service unavailable: {service_name}",
            details={"service": service_name, "reason": reason},
        )


class DirectoryTimeoutError(PageAssemblyError):
    """Raised when a directory lookup exceeds its timeout bound."""

    code = "DIRECTORY_TIMEOUT"
    status_code = 504
    retryable = True

    def __init__(self, restaurant_id: int, timeout_seconds: float) -> None:
        super().__init__(
            message=f"Directory lookup for restaurant {restaurant_id} timed out after {timeout_seconds}s",
            details={"restaurant_id": restaurant_id, "timeout_seconds": timeout_seconds},
        )


class DirectoryDecodeError(PageAssemblyError):
    """Raised when a directory response cannot be parsed into restaurant metadata."""

    code = "DIRECTORY_DECODE_ERROR"
    status_code = 502
    retryable = True

    def __init__(self, restaurant_id: int, error: str) -> None:
        super().__init__(
            message=f"Could not decode directory response for restaurant {restaurant_id}",
            details={"restaurant_id": restaurant_id, "error": error},
        )
