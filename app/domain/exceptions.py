"""Domain exceptions for the user records service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class UserServiceException(Exception):
    """Base exception for all user records service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(UserServiceException):
    """Raised when input validation fails (e.g. empty update)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class DuplicateResourceException(UserServiceException):
    """Raised when creating or updating a resource would violate a unique field."""

    def __init__(self, resource_type: str, field: str, value: str) -> None:
        """Initialize with the resource type and the conflicting field.

        Args:
            resource_type: Type of resource (e.g. 'user').
            field: Unique field that collided (e.g. 'email').
            value: The duplicate value.
        """
        super().__init__(
            f"{resource_type} already exists with {field}: {value}",
            "DUPLICATE_RESOURCE",
            {"resource_type": resource_type, "field": field},
        )


class ResourceNotFoundException(UserServiceException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )
