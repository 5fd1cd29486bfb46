"""Outcome records for validation and transactional operations."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ValidationResult(BaseModel):
    """Result of checking a book before a write."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str = ""
    field: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str, field: Optional[str] = None) -> "ValidationResult":
        return cls(valid=False, message=message, field=field)

    def __bool__(self) -> bool:
        return self.valid


class TransactionStatus(str, Enum):
    """Outcome of an atomic unit."""
    OK = "ok"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class TransactionResult(BaseModel):
    """Outcome of a transactional operation.

    Truthy only for ``TransactionStatus.OK``.
    """

    model_config = ConfigDict(frozen=True)

    status: TransactionStatus
    affected: int = 0
    message: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is TransactionStatus.OK

    def __bool__(self) -> bool:
        return self.succeeded
