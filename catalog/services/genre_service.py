"""Genre service."""
from typing import Optional

from sqlalchemy import select

from catalog.core.logging import get_logger
from catalog.models.genre import Genre
from catalog.schemas.genre import GenreCreate, GenreRead
from catalog.store import CatalogStore

logger = get_logger("genres")


class GenreService:
    """Service for genre operations."""

    def __init__(self, store: CatalogStore):
        self._store = store

    async def add_genre(self, data: GenreCreate) -> GenreRead:
        async with self._store.transaction() as session:
            genre = Genre(**data.model_dump())
            session.add(genre)
            await session.flush()

        logger.info("Added genre %s (%s)", genre.id, genre.name)
        return GenreRead.model_validate(genre)

    async def get_genre(self, genre_id: int) -> Optional[GenreRead]:
        async with self._store.session() as session:
            genre = await session.get(Genre, genre_id)
        return GenreRead.model_validate(genre) if genre else None

    async def list_genres(self) -> list[GenreRead]:
        async with self._store.session() as session:
            result = await session.execute(select(Genre).order_by(Genre.name, Genre.id))
            return [GenreRead.model_validate(g) for g in result.scalars().all()]

    async def update_genre(self, genre_id: int, data: GenreCreate) -> Optional[GenreRead]:
        async with self._store.transaction() as session:
            genre = await session.get(Genre, genre_id)
            if genre is None:
                return None
            genre.name = data.name
            genre.description = data.description

        logger.info("Updated genre %s", genre_id)
        return GenreRead.model_validate(genre)

    async def delete_genre(self, genre_id: int) -> bool:
        """Delete a genre; its books stay in the catalog without a genre."""
        async with self._store.transaction() as session:
            genre = await session.get(Genre, genre_id)
            if genre is None:
                return False
            await session.delete(genre)

        logger.info("Deleted genre %s", genre_id)
        return True
