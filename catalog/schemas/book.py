"""Book Pydantic schemas."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from catalog.schemas.author import AuthorRead
from catalog.schemas.common import ReadSchema
from catalog.schemas.genre import GenreRead


class BookCreate(BaseModel):
    """Schema for creating or replacing a book.

    Only types are enforced here. Business rules (non-empty title and ISBN,
    year range, non-negative price) are checked by ``BookValidator`` so that
    callers get a single, ordered message instead of a list of field errors.
    """

    title: str = ""
    isbn: str = ""
    publication_year: int
    price: Decimal
    is_available: bool = True
    author_id: int
    genre_id: Optional[int] = Field(None, description="Books may have no genre")


class BookRead(ReadSchema):
    """Book with its author and genre resolved."""

    id: int
    title: str
    isbn: str
    publication_year: int
    price: Decimal
    is_available: bool
    added_date: datetime
    author_id: int
    genre_id: Optional[int] = None
    author: Optional[AuthorRead] = None
    genre: Optional[GenreRead] = None

    @property
    def display_info(self) -> str:
        author = self.author.full_name if self.author else "Unknown"
        return f"{self.title} by {author} ({self.publication_year})"
