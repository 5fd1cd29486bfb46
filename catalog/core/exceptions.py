"""Custom exceptions for the catalog service."""
from typing import Any, Optional


class CatalogException(Exception):
    """Base catalog exception."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(CatalogException):
    """Resource not found errors."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} with id {resource_id} not found",
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class ValidationError(CatalogException):
    """Field-level or uniqueness rule violated before a write."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(
            message,
            error_code="VALIDATION_ERROR",
            details={"field": field} if field else {},
        )


class ConstraintViolationError(CatalogException):
    """The store rejected a write despite the service pre-checks."""

    def __init__(self, message: str = "The write violates a database constraint"):
        super().__init__(message, error_code="CONSTRAINT_VIOLATION")
