"""Single entry point for clients of the catalog."""
import time
from decimal import Decimal
from typing import Callable, Iterable, Optional

from catalog.config import settings
from catalog.schemas.author import AuthorCreate, AuthorRead
from catalog.schemas.book import BookCreate, BookRead
from catalog.schemas.common import Page
from catalog.schemas.genre import GenreCreate, GenreRead
from catalog.schemas.results import TransactionResult, ValidationResult
from catalog.schemas.statistics import CatalogStatistics
from catalog.services.author_service import AuthorService
from catalog.services.book_service import BookService
from catalog.services.genre_service import GenreService
from catalog.services.pagination import Paginator
from catalog.services.query_builder import SORT_TITLE
from catalog.services.statistics_service import StatisticsService
from catalog.services.transactions import TransactionCoordinator
from catalog.services.validation import BookValidator
from catalog.store import CatalogStore


class LibraryService:
    """Facade over the book, author, genre, transaction and statistics services.

    Inputs are ``*Create`` schemas and primitives; outputs are frozen
    ``*Read`` values or result records. No session or ORM object is
    returned.
    """

    def __init__(
        self,
        store: CatalogStore,
        cache_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        current_year: Optional[Callable[[], int]] = None,
    ):
        self.store = store
        self.validator = (
            BookValidator(store, current_year) if current_year else BookValidator(store)
        )
        self.books = BookService(
            store,
            self.validator,
            cache_ttl=cache_ttl if cache_ttl is not None else settings.cache_ttl_seconds,
            clock=clock,
        )
        self.authors = AuthorService(store)
        self.genres = GenreService(store)
        self.transactions = TransactionCoordinator(store, self.validator)
        self.statistics = StatisticsService(store)
        self.paginator = Paginator(store)

    # Validation

    def validate(self, book: BookCreate) -> ValidationResult:
        return self.validator.validate(book)

    async def is_isbn_unique(self, isbn: str, exclude_id: Optional[int] = None) -> bool:
        return await self.validator.is_isbn_unique(isbn, exclude_id)

    # Books

    async def add_book(self, data: BookCreate) -> BookRead:
        return await self.books.add_book(data)

    async def update_book(self, book_id: int, data: BookCreate) -> Optional[BookRead]:
        return await self.books.update_book(book_id, data)

    async def delete_book(self, book_id: int) -> bool:
        return await self.books.delete_book(book_id)

    async def get_all_books(self) -> list[BookRead]:
        return await self.books.get_all_books()

    async def get_book_by_id(self, book_id: int) -> Optional[BookRead]:
        return await self.books.get_book_by_id(book_id)

    async def get_books_by_author(self, author_id: int) -> list[BookRead]:
        return await self.books.get_books_by_author(author_id)

    async def search_books(self, term: Optional[str]) -> list[BookRead]:
        return await self.books.search_books(term)

    async def get_books_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[BookRead]:
        return await self.books.get_books_by_price_range(min_price, max_price)

    async def get_books_by_year(self, year: int) -> list[BookRead]:
        return await self.books.get_books_by_year(year)

    async def get_books_by_genre(self, genre_name: str) -> list[BookRead]:
        return await self.books.get_books_by_genre(genre_name)

    async def get_books_published_after(self, year: int) -> list[BookRead]:
        return await self.books.get_books_published_after(year)

    async def get_cached_books(self) -> tuple[BookRead, ...]:
        """Full catalog from a time-bounded snapshot.

        The snapshot is only refreshed once it is older than the configured
        TTL (five minutes by default). Writes made through this service do
        not invalidate it, so results may be stale until the TTL elapses.
        """
        return await self.books.get_cached_books()

    async def paginate(
        self,
        page_number: int = 1,
        page_size: Optional[int] = None,
        sort_key: str = SORT_TITLE,
    ) -> Page[BookRead]:
        size = page_size if page_size is not None else settings.default_page_size
        return await self.paginator.paginate(page_number, size, sort_key)

    # Authors

    async def add_author(self, data: AuthorCreate) -> AuthorRead:
        return await self.authors.add_author(data)

    async def get_author(self, author_id: int) -> Optional[AuthorRead]:
        return await self.authors.get_author(author_id)

    async def list_authors(self) -> list[AuthorRead]:
        return await self.authors.list_authors()

    async def update_author(self, author_id: int, data: AuthorCreate) -> Optional[AuthorRead]:
        return await self.authors.update_author(author_id, data)

    async def delete_author(self, author_id: int) -> bool:
        return await self.authors.delete_author(author_id)

    # Genres

    async def add_genre(self, data: GenreCreate) -> GenreRead:
        return await self.genres.add_genre(data)

    async def get_genre(self, genre_id: int) -> Optional[GenreRead]:
        return await self.genres.get_genre(genre_id)

    async def list_genres(self) -> list[GenreRead]:
        return await self.genres.list_genres()

    async def update_genre(self, genre_id: int, data: GenreCreate) -> Optional[GenreRead]:
        return await self.genres.update_genre(genre_id, data)

    async def delete_genre(self, genre_id: int) -> bool:
        return await self.genres.delete_genre(genre_id)

    # Transactions

    async def transfer_book_ownership(self, book_id: int, new_author_id: int) -> TransactionResult:
        return await self.transactions.transfer_book_ownership(book_id, new_author_id)

    async def apply_discount_to_genre(self, genre_id: int, percent: Decimal) -> TransactionResult:
        return await self.transactions.apply_discount_to_genre(genre_id, percent)

    async def bulk_insert_books(self, books: Iterable[BookCreate]) -> int:
        return await self.transactions.bulk_insert_books(books)

    async def bulk_delete_books(self, book_ids: Iterable[int]) -> int:
        return await self.transactions.bulk_delete_books(book_ids)

    # Statistics

    async def compute_statistics(self) -> CatalogStatistics:
        return await self.statistics.compute_statistics()

    async def total_catalog_value(self) -> Decimal:
        return await self.statistics.total_catalog_value()
