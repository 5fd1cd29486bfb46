"""Pydantic schemas."""
from catalog.schemas.author import AuthorCreate, AuthorRead
from catalog.schemas.book import BookCreate, BookRead
from catalog.schemas.common import Page, ReadSchema
from catalog.schemas.genre import GenreCreate, GenreRead
from catalog.schemas.results import TransactionResult, TransactionStatus, ValidationResult
from catalog.schemas.statistics import NO_BOOKS_FOUND, CatalogStatistics, GenreSummary, YearSummary

__all__ = [
    # Common
    "ReadSchema",
    "Page",
    # Entities
    "AuthorCreate",
    "AuthorRead",
    "BookCreate",
    "BookRead",
    "GenreCreate",
    "GenreRead",
    # Results
    "ValidationResult",
    "TransactionResult",
    "TransactionStatus",
    # Statistics
    "CatalogStatistics",
    "GenreSummary",
    "YearSummary",
    "NO_BOOKS_FOUND",
]
