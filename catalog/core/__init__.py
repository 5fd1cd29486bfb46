"""Core utilities."""
from catalog.core.cache import SnapshotCache
from catalog.core.exceptions import (
    CatalogException,
    ConstraintViolationError,
    NotFoundError,
    ValidationError,
)
from catalog.core.logging import get_logger, setup_logging

__all__ = [
    # Cache
    "SnapshotCache",
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "CatalogException",
    "NotFoundError",
    "ValidationError",
    "ConstraintViolationError",
]
