"""Catalog statistics schemas."""
from decimal import Decimal

from catalog.schemas.common import ReadSchema

NO_BOOKS_FOUND = "No books found"


class YearSummary(ReadSchema):
    """Books published in one year."""

    year: int
    count: int
    average_price: Decimal


class GenreSummary(ReadSchema):
    """Books filed under one genre."""

    genre: str
    count: int
    average_price: Decimal


class CatalogStatistics(ReadSchema):
    """Summary of the whole catalog."""

    total_books: int
    total_authors: int
    total_genres: int
    available_books: int
    unavailable_books: int
    average_price: Decimal
    most_expensive: str = NO_BOOKS_FOUND
    cheapest: str = NO_BOOKS_FOUND
    books_by_year: tuple[YearSummary, ...] = ()
    books_by_genre: tuple[GenreSummary, ...] = ()
