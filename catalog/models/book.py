"""Book model."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.author import Author
    from catalog.models.genre import Genre


TITLE_MAX_LENGTH = 255
ISBN_MAX_LENGTH = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Book(Base):
    """Book in the catalog."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    isbn: Mapped[str] = mapped_column(String(ISBN_MAX_LENGTH), unique=True, index=True, nullable=False)
    publication_year: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    added_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    genre_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("genres.id", ondelete="SET NULL"), nullable=True, index=True
    )

    # Relationships
    author: Mapped["Author"] = relationship("Author", back_populates="books")
    genre: Mapped[Optional["Genre"]] = relationship("Genre", back_populates="books")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title}, isbn={self.isbn})>"
