"""Genre model."""
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


class Genre(Base):
    """Genre grouping books. Names are unique by convention only."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships; the database nulls books.genre_id on delete
    books: Mapped[list["Book"]] = relationship(
        "Book", back_populates="genre", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name={self.name})>"
