"""Composable book queries.

``BookQuery`` wraps a SQLAlchemy ``Select`` and adds the filters, joins,
sort keys and windowing the catalog needs. Every method returns a new
query, so partial queries can be shared and extended safely. Author and
genre are always loaded eagerly when the query executes.
"""
from typing import Any, Optional, Union

from sqlalchemy import Select, TextClause, func, or_, select, text
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.genre import Genre

SORT_TITLE = "title"
SORT_PRICE = "price"
SORT_YEAR = "year"
SORT_AUTHOR = "author"

SORT_KEYS = (SORT_TITLE, SORT_PRICE, SORT_YEAR, SORT_AUTHOR)

_EAGER = (selectinload(Book.author), selectinload(Book.genre))


class BookQuery:
    """Immutable builder for book ``SELECT`` statements."""

    def __init__(self, statement: Optional[Select] = None, joined: frozenset[str] = frozenset()):
        self._statement = statement if statement is not None else select(Book)
        self._joined = joined

    def _derive(self, statement: Select, joined: Optional[frozenset[str]] = None) -> "BookQuery":
        return BookQuery(statement, self._joined if joined is None else joined)

    def _join(self, relation: str) -> "BookQuery":
        if relation in self._joined:
            return self
        target = Book.author if relation == "author" else Book.genre
        return self._derive(self._statement.join(target), self._joined | {relation})

    # -- filters --------------------------------------------------------

    def where(self, *criteria: Any) -> "BookQuery":
        return self._derive(self._statement.where(*criteria))

    def by_id(self, book_id: int) -> "BookQuery":
        return self.where(Book.id == book_id)

    def by_ids(self, book_ids: list[int]) -> "BookQuery":
        return self.where(Book.id.in_(book_ids))

    def by_author(self, author_id: int) -> "BookQuery":
        return self.where(Book.author_id == author_id)

    def by_genre_id(self, genre_id: int) -> "BookQuery":
        return self.where(Book.genre_id == genre_id)

    def matching(self, term: str) -> "BookQuery":
        """Case-insensitive substring match on title or author name."""
        term = term.strip()
        full_name = Author.first_name + " " + Author.last_name
        return self._join("author").where(
            or_(
                Book.title.icontains(term, autoescape=True),
                full_name.icontains(term, autoescape=True),
            )
        )

    def price_between(self, min_price: Any, max_price: Any) -> "BookQuery":
        return self.where(Book.price >= min_price, Book.price <= max_price)

    def published_in(self, year: int) -> "BookQuery":
        return self.where(Book.publication_year == year)

    def in_genre(self, genre_name: str) -> "BookQuery":
        return self._join("genre").where(
            func.lower(Genre.name) == genre_name.strip().lower()
        )

    def with_isbn(self, isbn: str, exclude_id: Optional[int] = None) -> "BookQuery":
        query = self.where(Book.isbn == isbn.strip())
        if exclude_id is not None:
            query = query.where(Book.id != exclude_id)
        return query

    # -- ordering and windowing ----------------------------------------

    def order_by(self, *clauses: Any) -> "BookQuery":
        return self._derive(self._statement.order_by(*clauses))

    def sorted_by(self, sort_key: Optional[str]) -> "BookQuery":
        """Order by a named sort key; unknown keys fall back to title."""
        key = (sort_key or "").strip().lower()
        if key == SORT_PRICE:
            return self.order_by(Book.price.asc(), Book.id.asc())
        if key == SORT_YEAR:
            return self.order_by(Book.publication_year.desc(), Book.id.asc())
        if key == SORT_AUTHOR:
            return self._join("author").order_by(
                Author.last_name.asc(), Author.first_name.asc(), Book.id.asc()
            )
        return self.order_by(Book.title.asc(), Book.id.asc())

    def window(self, page_number: int, page_size: int) -> "BookQuery":
        """Skip ``(page_number - 1) * page_size`` rows and take ``page_size``."""
        offset = (page_number - 1) * page_size
        return self._derive(self._statement.offset(offset).limit(page_size))

    # -- execution ------------------------------------------------------

    @property
    def statement(self) -> Select:
        return self._statement.options(*_EAGER)

    async def all(self, session: AsyncSession) -> list[Book]:
        result = await session.execute(self.statement)
        return list(result.scalars().all())

    async def one_or_none(self, session: AsyncSession) -> Optional[Book]:
        result = await session.execute(self.statement)
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession) -> bool:
        result = await session.execute(
            select(self._statement.with_only_columns(Book.id).limit(1).exists())
        )
        return bool(result.scalar())

    async def count(self, session: AsyncSession) -> int:
        base = self._statement.order_by(None).limit(None).offset(None)
        result = await session.execute(select(func.count()).select_from(base.subquery()))
        return result.scalar_one()

    @staticmethod
    def raw(sql: Union[str, TextClause], **params: Any) -> "RawBookQuery":
        """Parameterized text query for what the structured form cannot express.

        The text must select every ``books`` column in table order, e.g.
        ``SELECT books.* FROM books WHERE ...``.
        """
        return RawBookQuery(sql, params)


class RawBookQuery:
    """Textual ``SELECT`` mapped onto ``Book`` with eager relations."""

    def __init__(self, sql: Union[str, TextClause], params: dict[str, Any]):
        clause = text(sql) if isinstance(sql, str) else sql
        if params:
            clause = clause.bindparams(**params)
        self._textual = clause.columns(*Book.__table__.columns)

    @property
    def statement(self):
        return select(Book).options(*_EAGER).from_statement(self._textual)

    async def all(self, session: AsyncSession) -> list[Book]:
        result = await session.execute(self.statement)
        return list(result.scalars().all())
