"""Genre Pydantic schemas."""
from typing import Optional

from pydantic import BaseModel, Field

from catalog.schemas.common import ReadSchema


class GenreCreate(BaseModel):
    """Schema for creating or replacing a genre."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class GenreRead(ReadSchema):
    """Genre as returned to callers."""

    id: int
    name: str
    description: Optional[str] = None
