"""Catalog-wide aggregates."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from sqlalchemy import case, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.logging import get_logger
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.genre import Genre
from catalog.schemas.book import BookRead
from catalog.schemas.statistics import (
    NO_BOOKS_FOUND,
    CatalogStatistics,
    GenreSummary,
    YearSummary,
)
from catalog.services.query_builder import BookQuery
from catalog.store import CatalogStore

logger = get_logger("statistics")

UNCATEGORIZED = "Uncategorized"


def to_money(value: Any) -> Decimal:
    """Round an aggregate (float, Decimal or None) to two places."""
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def describe(book: Optional[Book]) -> str:
    if book is None:
        return NO_BOOKS_FOUND
    value = BookRead.model_validate(book)
    return f"{value.display_info} - ${value.price:.2f}"


class StatisticsService:
    """Computes summaries over the whole catalog."""

    def __init__(self, store: CatalogStore):
        self._store = store

    async def _scalar(self, session: AsyncSession, statement) -> Any:
        return (await session.execute(statement)).scalar_one()

    async def compute_statistics(self) -> CatalogStatistics:
        """Counts, price extremes and per-year / per-genre breakdowns."""
        async with self._store.session() as session:
            total_books = await self._scalar(session, select(func.count(Book.id)))
            total_authors = await self._scalar(session, select(func.count(Author.id)))
            total_genres = await self._scalar(session, select(func.count(Genre.id)))
            available = await self._scalar(
                session,
                select(func.coalesce(func.sum(case((Book.is_available.is_(True), 1), else_=0)), 0)),
            )
            average = await self._scalar(session, select(func.avg(Book.price)))

            most_expensive = await BookQuery().order_by(
                Book.price.desc(), Book.id.asc()
            ).window(1, 1).one_or_none(session)
            cheapest = await BookQuery().order_by(
                Book.price.asc(), Book.id.asc()
            ).window(1, 1).one_or_none(session)

            by_year = await session.execute(
                select(
                    Book.publication_year,
                    func.count(Book.id),
                    func.avg(Book.price),
                )
                .group_by(Book.publication_year)
                .order_by(Book.publication_year.desc())
            )

            book_count = func.count(Book.id).label("book_count")
            genre_name = func.coalesce(Genre.name, UNCATEGORIZED).label("genre_name")
            by_genre = await session.execute(
                select(genre_name, book_count, func.avg(Book.price))
                .select_from(Book)
                .outerjoin(Genre, Book.genre_id == Genre.id)
                .group_by(Genre.id, Genre.name)
                .order_by(desc(book_count), genre_name.asc())
            )

            statistics = CatalogStatistics(
                total_books=total_books,
                total_authors=total_authors,
                total_genres=total_genres,
                available_books=available,
                unavailable_books=total_books - available,
                average_price=to_money(average),
                most_expensive=describe(most_expensive),
                cheapest=describe(cheapest),
                books_by_year=tuple(
                    YearSummary(year=year, count=count, average_price=to_money(avg))
                    for year, count, avg in by_year.all()
                ),
                books_by_genre=tuple(
                    GenreSummary(genre=name, count=count, average_price=to_money(avg))
                    for name, count, avg in by_genre.all()
                ),
            )

        logger.debug("Computed statistics for %d book(s)", total_books)
        return statistics

    async def total_catalog_value(self) -> Decimal:
        """Sum of all book prices; zero for an empty catalog."""
        async with self._store.session() as session:
            total = await self._scalar(session, select(func.sum(Book.price)))
        return to_money(total)
