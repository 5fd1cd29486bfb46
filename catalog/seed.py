"""Demo data for an empty catalog."""
from decimal import Decimal

from catalog.core.logging import get_logger
from catalog.schemas.author import AuthorCreate
from catalog.schemas.book import BookCreate
from catalog.schemas.genre import GenreCreate
from catalog.services.library_service import LibraryService

logger = get_logger("seed")

AUTHORS = [
    AuthorCreate(first_name="George", last_name="Orwell", country="UK"),
    AuthorCreate(first_name="Isaac", last_name="Asimov", country="USA"),
    AuthorCreate(first_name="Agatha", last_name="Christie", country="UK"),
    AuthorCreate(first_name="J.K.", last_name="Rowling", country="UK"),
    AuthorCreate(first_name="Stephen", last_name="King", country="USA"),
]

GENRES = [
    GenreCreate(name="Fiction", description="Fictional books"),
    GenreCreate(name="Science Fiction", description="Sci-fi books"),
    GenreCreate(name="Mystery", description="Mystery books"),
    GenreCreate(name="Fantasy", description="Fantasy books"),
    GenreCreate(name="Horror", description="Horror books"),
]

# (title, isbn, year, price, author last name, genre name)
BOOKS = [
    ("1984", "978-0451524935", 1949, "9.99", "Orwell", "Fiction"),
    ("Animal Farm", "978-0451526342", 1945, "7.99", "Orwell", "Fiction"),
    ("Foundation", "978-0553293357", 1951, "12.99", "Asimov", "Science Fiction"),
    ("Murder on the Orient Express", "978-0062693662", 1934, "8.99", "Christie", "Mystery"),
    ("Harry Potter and the Philosopher's Stone", "978-0747532743", 1997, "15.99", "Rowling", "Fantasy"),
    ("The Shining", "978-0307743657", 1977, "11.99", "King", "Horror"),
]


class DataSeeder:
    """Fills each table only when it is empty, so re-running is harmless."""

    def __init__(self, service: LibraryService):
        self._service = service

    async def seed(self) -> None:
        logger.info("Seeding database")
        await self._seed_authors()
        await self._seed_genres()
        await self._seed_books()
        logger.info("Seeding completed")

    async def _seed_authors(self) -> None:
        if await self._service.list_authors():
            logger.info("Authors already exist, skipping")
            return
        for author in AUTHORS:
            await self._service.add_author(author)
        logger.info("Added %d authors", len(AUTHORS))

    async def _seed_genres(self) -> None:
        if await self._service.list_genres():
            logger.info("Genres already exist, skipping")
            return
        for genre in GENRES:
            await self._service.add_genre(genre)
        logger.info("Added %d genres", len(GENRES))

    async def _seed_books(self) -> None:
        if await self._service.get_all_books():
            logger.info("Books already exist, skipping")
            return

        authors = {a.last_name: a.id for a in await self._service.list_authors()}
        genres = {g.name: g.id for g in await self._service.list_genres()}

        books = [
            BookCreate(
                title=title,
                isbn=isbn,
                publication_year=year,
                price=Decimal(price),
                author_id=authors[last_name],
                genre_id=genres.get(genre),
            )
            for title, isbn, year, price, last_name, genre in BOOKS
            if last_name in authors
        ]
        count = await self._service.bulk_insert_books(books)
        logger.info("Added %d books", count)
