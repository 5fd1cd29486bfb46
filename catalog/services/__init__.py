"""Business logic services."""
from catalog.services.author_service import AuthorService
from catalog.services.book_service import BookService
from catalog.services.genre_service import GenreService
from catalog.services.library_service import LibraryService
from catalog.services.pagination import Paginator
from catalog.services.query_builder import BookQuery
from catalog.services.statistics_service import StatisticsService
from catalog.services.transactions import TransactionCoordinator
from catalog.services.validation import BookValidator

__all__ = [
    "AuthorService",
    "BookQuery",
    "BookService",
    "BookValidator",
    "GenreService",
    "LibraryService",
    "Paginator",
    "StatisticsService",
    "TransactionCoordinator",
]
