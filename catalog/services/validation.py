"""Field-level and uniqueness checks run before any book write."""
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.logging import get_logger
from catalog.models.author import Author
from catalog.models.book import ISBN_MAX_LENGTH, TITLE_MAX_LENGTH
from catalog.models.genre import Genre
from catalog.schemas.results import ValidationResult
from catalog.services.query_builder import BookQuery
from catalog.store import CatalogStore

logger = get_logger("validation")

MIN_PUBLICATION_YEAR = 1000


def _current_year() -> int:
    return datetime.now(timezone.utc).year


class BookValidator:
    """Checks a book's fields and ISBN uniqueness."""

    def __init__(self, store: CatalogStore, current_year: Callable[[], int] = _current_year):
        self._store = store
        self._current_year = current_year

    def validate(self, book: Any) -> ValidationResult:
        """Check a book, stopping at the first violated rule.

        ``book`` may be any object exposing ``title``, ``isbn``,
        ``publication_year`` and ``price`` (a ``BookCreate`` or ``BookRead``).
        """
        if not (book.title or "").strip():
            return ValidationResult.fail("Title is required.", field="title")

        if len(book.title.strip()) > TITLE_MAX_LENGTH:
            return ValidationResult.fail(
                f"Title must be at most {TITLE_MAX_LENGTH} characters.", field="title"
            )

        if not (book.isbn or "").strip():
            return ValidationResult.fail("ISBN is required.", field="isbn")

        if len(book.isbn.strip()) > ISBN_MAX_LENGTH:
            return ValidationResult.fail(
                f"ISBN must be at most {ISBN_MAX_LENGTH} characters.", field="isbn"
            )

        max_year = self._current_year() + 1
        if not MIN_PUBLICATION_YEAR <= book.publication_year <= max_year:
            return ValidationResult.fail(
                f"Publication year must be between {MIN_PUBLICATION_YEAR} and {max_year}.",
                field="publication_year",
            )

        if Decimal(book.price) < 0:
            return ValidationResult.fail("Price cannot be negative.", field="price")

        return ValidationResult.ok()

    async def is_isbn_unique(self, isbn: str, exclude_id: Optional[int] = None) -> bool:
        """True when no other book carries ``isbn``.

        Advisory only: the unique index on ``books.isbn`` is the final
        authority, but checking first lets callers report a readable error.
        """
        async with self._store.session() as session:
            taken = await BookQuery().with_isbn(isbn, exclude_id).exists(session)
        if taken:
            logger.debug("ISBN %s already in use", isbn)
        return not taken

    async def check_references(self, session: AsyncSession, book: Any) -> ValidationResult:
        """Check that the book's author, and genre if set, exist.

        Runs on the caller's session so the check shares the write's
        transaction.
        """
        if await session.get(Author, book.author_id) is None:
            return ValidationResult.fail(
                f"Author with id {book.author_id} does not exist.", field="author_id"
            )
        if book.genre_id is not None and await session.get(Genre, book.genre_id) is None:
            return ValidationResult.fail(
                f"Genre with id {book.genre_id} does not exist.", field="genre_id"
            )
        return ValidationResult.ok()
