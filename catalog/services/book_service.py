"""Book service: CRUD, filtered reads and the cached catalog read."""
import time
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.cache import SnapshotCache
from catalog.core.exceptions import ValidationError
from catalog.core.logging import get_logger
from catalog.models.book import Book
from catalog.schemas.book import BookCreate, BookRead
from catalog.services.query_builder import BookQuery
from catalog.services.validation import BookValidator
from catalog.store import CatalogStore

logger = get_logger("books")

DEFAULT_CACHE_TTL = 300.0

_PUBLISHED_AFTER_SQL = (
    "SELECT books.* FROM books "
    "WHERE books.publication_year > :year "
    "ORDER BY books.publication_year DESC, books.id ASC"
)


def _read_all(books: list[Book]) -> list[BookRead]:
    return [BookRead.model_validate(book) for book in books]


class BookService:
    """Service for book operations."""

    def __init__(
        self,
        store: CatalogStore,
        validator: Optional[BookValidator] = None,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._store = store
        self.validator = validator or BookValidator(store)
        self._cache: SnapshotCache[tuple[BookRead, ...]] = SnapshotCache(
            self._load_snapshot, ttl=cache_ttl, clock=clock
        )

    async def _fetch(self, query: BookQuery) -> list[BookRead]:
        async with self._store.session() as session:
            return _read_all(await query.all(session))

    async def check_book(self, data: BookCreate, exclude_id: Optional[int] = None) -> None:
        """Raise ``ValidationError`` unless ``data`` may be written."""
        result = self.validator.validate(data)
        if not result:
            logger.warning("Rejected book %r: %s", data.title, result.message)
            raise ValidationError(result.message, field=result.field)

        if not await self.validator.is_isbn_unique(data.isbn, exclude_id=exclude_id):
            message = f"A book with ISBN {data.isbn.strip()} already exists."
            logger.warning("Rejected book %r: %s", data.title, message)
            raise ValidationError(message, field="isbn")

    async def _check_references(self, session: AsyncSession, data: BookCreate) -> None:
        result = await self.validator.check_references(session, data)
        if not result:
            raise ValidationError(result.message, field=result.field)

    # -- CRUD ----------------------------------------------------------

    async def add_book(self, data: BookCreate) -> BookRead:
        """Validate and insert a book."""
        await self.check_book(data)

        async with self._store.transaction() as session:
            await self._check_references(session, data)
            book = Book(**data.model_dump())
            book.title = data.title.strip()
            book.isbn = data.isbn.strip()
            session.add(book)
            await session.flush()
            book_id = book.id

        logger.info("Added book %s (%s)", book_id, book.title)
        return await self.get_book_by_id(book_id)

    async def update_book(self, book_id: int, data: BookCreate) -> Optional[BookRead]:
        """Replace every mutable field of a book.

        Identity and ``added_date`` are preserved. Returns ``None`` when the
        book does not exist.
        """
        await self.check_book(data, exclude_id=book_id)

        async with self._store.transaction() as session:
            book = await session.get(Book, book_id)
            if book is None:
                return None
            await self._check_references(session, data)

            book.title = data.title.strip()
            book.isbn = data.isbn.strip()
            book.publication_year = data.publication_year
            book.price = data.price
            book.is_available = data.is_available
            book.author_id = data.author_id
            book.genre_id = data.genre_id

        logger.info("Updated book %s", book_id)
        return await self.get_book_by_id(book_id)

    async def delete_book(self, book_id: int) -> bool:
        """Delete a book. Returns ``False`` when it does not exist."""
        async with self._store.transaction() as session:
            book = await session.get(Book, book_id)
            if book is None:
                return False
            await session.delete(book)

        logger.info("Deleted book %s", book_id)
        return True

    # -- Reads ---------------------------------------------------------

    async def get_all_books(self) -> list[BookRead]:
        return await self._fetch(BookQuery().order_by(Book.id))

    async def get_book_by_id(self, book_id: int) -> Optional[BookRead]:
        async with self._store.session() as session:
            book = await BookQuery().by_id(book_id).one_or_none(session)
        return BookRead.model_validate(book) if book else None

    async def get_books_by_author(self, author_id: int) -> list[BookRead]:
        return await self._fetch(BookQuery().by_author(author_id).sorted_by("title"))

    async def search_books(self, term: Optional[str]) -> list[BookRead]:
        """Case-insensitive match on title or author name, ordered by title.

        A blank term returns an empty list without querying the store.
        """
        if not term or not term.strip():
            return []
        return await self._fetch(BookQuery().matching(term).sorted_by("title"))

    async def get_books_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[BookRead]:
        return await self._fetch(BookQuery().price_between(min_price, max_price).sorted_by("price"))

    async def get_books_by_year(self, year: int) -> list[BookRead]:
        return await self._fetch(BookQuery().published_in(year).sorted_by("title"))

    async def get_books_by_genre(self, genre_name: str) -> list[BookRead]:
        return await self._fetch(BookQuery().in_genre(genre_name).sorted_by("title"))

    async def get_books_published_after(self, year: int) -> list[BookRead]:
        async with self._store.session() as session:
            books = await BookQuery.raw(_PUBLISHED_AFTER_SQL, year=year).all(session)
        return _read_all(books)

    # -- Cache ---------------------------------------------------------

    async def _load_snapshot(self) -> tuple[BookRead, ...]:
        return tuple(await self.get_all_books())

    async def get_cached_books(self) -> tuple[BookRead, ...]:
        """Full catalog read, served from a snapshot for up to ``cache_ttl`` seconds.

        Writes do not refresh the snapshot. After adding, updating or deleting
        a book, this method may keep returning the previous catalog until the
        staleness window elapses. Use ``get_all_books`` when the read must
        reflect the latest writes.
        """
        return await self._cache.get()

    @property
    def cache(self) -> SnapshotCache[tuple[BookRead, ...]]:
        return self._cache
