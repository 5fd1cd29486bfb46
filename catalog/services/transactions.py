"""Multi-row mutations executed as single atomic units."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from catalog.core.exceptions import ValidationError
from catalog.core.logging import get_logger
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.genre import Genre
from catalog.schemas.book import BookCreate
from catalog.schemas.results import TransactionResult, TransactionStatus
from catalog.services.query_builder import BookQuery
from catalog.services.validation import BookValidator
from catalog.store import CatalogStore

logger = get_logger("transactions")

CENT = Decimal("0.01")


def discounted_price(price: Decimal, percent: Decimal) -> Decimal:
    """Apply a percentage discount and round to cents."""
    factor = Decimal(1) - Decimal(percent) / Decimal(100)
    return (Decimal(price) * factor).quantize(CENT, rounding=ROUND_HALF_UP)


class TransactionCoordinator:
    """Runs every multi-step mutation inside one ``store.transaction()``.

    Either all steps of an operation commit or none do. How a failure is
    reported depends on the operation:

    * ``transfer_book_ownership`` never raises; it returns a
      ``TransactionResult`` whose status tells "not found" apart from a fault.
    * ``apply_discount_to_genre`` re-raises the underlying exception after
      rollback, so the caller sees exactly why no price changed.
    """

    def __init__(self, store: CatalogStore, validator: BookValidator):
        self._store = store
        self._validator = validator

    async def transfer_book_ownership(self, book_id: int, new_author_id: int) -> TransactionResult:
        """Reassign a book to another author."""
        try:
            async with self._store.transaction() as session:
                book = await session.get(Book, book_id)
                author = await session.get(Author, new_author_id)
                if book is None or author is None:
                    missing = "Book" if book is None else "Author"
                    missing_id = book_id if book is None else new_author_id
                    logger.info("Transfer skipped: %s %s not found", missing, missing_id)
                    return TransactionResult(
                        status=TransactionStatus.NOT_FOUND,
                        message=f"{missing} with id {missing_id} not found",
                    )
                book.author_id = author.id
        except Exception as exc:
            logger.warning("Transfer of book %s failed: %s", book_id, exc)
            return TransactionResult(status=TransactionStatus.FAILED, message=str(exc))

        logger.info("Transferred book %s to author %s", book_id, new_author_id)
        return TransactionResult(status=TransactionStatus.OK, affected=1)

    async def apply_discount_to_genre(self, genre_id: int, percent: Decimal) -> TransactionResult:
        """Multiply the price of every book in a genre by ``1 - percent/100``."""
        percent = Decimal(percent)
        if not Decimal(0) <= percent <= Decimal(100):
            raise ValidationError("Discount must be between 0 and 100 percent.", field="percent")

        async with self._store.transaction() as session:
            if await session.get(Genre, genre_id) is None:
                return TransactionResult(
                    status=TransactionStatus.NOT_FOUND,
                    message=f"Genre with id {genre_id} not found",
                )
            books = await BookQuery().by_genre_id(genre_id).order_by(Book.id).all(session)
            for book in books:
                book.price = discounted_price(book.price, percent)
            await session.flush()

        logger.info("Applied %s%% discount to %d book(s) in genre %s", percent, len(books), genre_id)
        return TransactionResult(status=TransactionStatus.OK, affected=len(books))

    async def bulk_insert_books(self, books: Iterable[BookCreate]) -> int:
        """Insert a batch of books with a single commit.

        Every row is validated and every ISBN checked (against the store and
        within the batch) before anything is written. Author and genre
        references are checked inside the transaction.
        """
        batch = list(books)
        if not batch:
            return 0

        seen: set[str] = set()
        for data in batch:
            result = self._validator.validate(data)
            if not result:
                raise ValidationError(f"{data.title or '<untitled>'}: {result.message}", field=result.field)
            isbn = data.isbn.strip()
            if isbn in seen or not await self._validator.is_isbn_unique(isbn):
                raise ValidationError(f"A book with ISBN {isbn} already exists.", field="isbn")
            seen.add(isbn)

        async with self._store.transaction() as session:
            rows = []
            for data in batch:
                result = await self._validator.check_references(session, data)
                if not result:
                    raise ValidationError(f"{data.title.strip()}: {result.message}", field=result.field)
                book = Book(**data.model_dump())
                book.title = data.title.strip()
                book.isbn = data.isbn.strip()
                rows.append(book)
            session.add_all(rows)
            await session.flush()

        logger.info("Bulk inserted %d book(s)", len(rows))
        return len(rows)

    async def bulk_delete_books(self, book_ids: Iterable[int]) -> int:
        """Delete the given books in one unit; returns how many existed."""
        ids = sorted(set(book_ids))
        if not ids:
            return 0

        async with self._store.transaction() as session:
            books = await BookQuery().by_ids(ids).all(session)
            for book in books:
                await session.delete(book)

        logger.info("Bulk deleted %d of %d requested book(s)", len(books), len(ids))
        return len(books)
