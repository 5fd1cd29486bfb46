"""Shared fixtures: in-memory database, service wired to a fake clock, sample catalog."""
from decimal import Decimal

import pytest

import catalog.models  # noqa: F401  (registers tables)
from catalog.database import Base, build_engine, build_session_factory
from catalog.schemas import AuthorCreate, BookCreate, GenreCreate
from catalog.services.library_service import LibraryService
from catalog.store import SqlAlchemyStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
CURRENT_YEAR = 2025


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = build_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine):
    return SqlAlchemyStore(build_session_factory(engine))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store, clock):
    return LibraryService(
        store,
        cache_ttl=300,
        clock=clock,
        current_year=lambda: CURRENT_YEAR,
    )


def make_book(title, isbn, year, price, author_id, genre_id=None, is_available=True):
    return BookCreate(
        title=title,
        isbn=isbn,
        publication_year=year,
        price=Decimal(price),
        author_id=author_id,
        genre_id=genre_id,
        is_available=is_available,
    )


@pytest.fixture
async def sample_catalog(service):
    """Three authors, three genres and five books with distinct prices."""
    orwell = await service.add_author(AuthorCreate(first_name="George", last_name="Orwell", country="UK"))
    asimov = await service.add_author(AuthorCreate(first_name="Isaac", last_name="Asimov", country="USA"))
    christie = await service.add_author(AuthorCreate(first_name="Agatha", last_name="Christie", country="UK"))

    fiction = await service.add_genre(GenreCreate(name="Fiction"))
    scifi = await service.add_genre(GenreCreate(name="Science Fiction"))
    mystery = await service.add_genre(GenreCreate(name="Mystery"))

    books = {}
    for data in [
        make_book("1984", "978-0451524935", 1949, "9.99", orwell.id, fiction.id),
        make_book("Animal Farm", "978-0451526342", 1945, "7.99", orwell.id, fiction.id),
        make_book("Foundation", "978-0553293357", 1951, "12.99", asimov.id, scifi.id),
        make_book("I, Robot", "978-0553382563", 1950, "6.99", asimov.id, scifi.id, is_available=False),
        make_book("Murder on the Orient Express", "978-0062693662", 1934, "8.99", christie.id, mystery.id),
    ]:
        book = await service.add_book(data)
        books[book.title] = book

    return {
        "authors": {"orwell": orwell, "asimov": asimov, "christie": christie},
        "genres": {"fiction": fiction, "scifi": scifi, "mystery": mystery},
        "books": books,
    }
