"""Author Pydantic schemas."""
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from catalog.schemas.common import ReadSchema


class AuthorCreate(BaseModel):
    """Schema for creating or replacing an author."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    biography: Optional[str] = None
    birth_date: Optional[date] = None
    country: Optional[str] = Field(None, max_length=100)


class AuthorRead(ReadSchema):
    """Author as returned to callers."""

    id: int
    first_name: str
    last_name: str
    biography: Optional[str] = None
    birth_date: Optional[date] = None
    country: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
