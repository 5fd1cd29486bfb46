"""Common Pydantic schemas."""
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

DataT = TypeVar("DataT")


class ReadSchema(BaseModel):
    """Immutable value read out of the store."""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class Page(BaseModel, Generic[DataT]):
    """One window of an ordered result set."""

    items: list[DataT]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
