"""Author service."""
from typing import Optional

from sqlalchemy import select

from catalog.core.logging import get_logger
from catalog.models.author import Author
from catalog.schemas.author import AuthorCreate, AuthorRead
from catalog.store import CatalogStore

logger = get_logger("authors")


class AuthorService:
    """Service for author operations."""

    def __init__(self, store: CatalogStore):
        self._store = store

    async def add_author(self, data: AuthorCreate) -> AuthorRead:
        """Create a new author."""
        async with self._store.transaction() as session:
            author = Author(**data.model_dump())
            session.add(author)
            await session.flush()

        logger.info("Added author %s (%s)", author.id, author.full_name)
        return AuthorRead.model_validate(author)

    async def get_author(self, author_id: int) -> Optional[AuthorRead]:
        """Get an author by ID."""
        async with self._store.session() as session:
            author = await session.get(Author, author_id)
        return AuthorRead.model_validate(author) if author else None

    async def list_authors(self) -> list[AuthorRead]:
        """List authors sorted by last name, then first name."""
        async with self._store.session() as session:
            result = await session.execute(
                select(Author).order_by(Author.last_name, Author.first_name, Author.id)
            )
            return [AuthorRead.model_validate(a) for a in result.scalars().all()]

    async def update_author(self, author_id: int, data: AuthorCreate) -> Optional[AuthorRead]:
        """Replace every field of an author."""
        async with self._store.transaction() as session:
            author = await session.get(Author, author_id)
            if author is None:
                return None
            for field, value in data.model_dump().items():
                setattr(author, field, value)

        logger.info("Updated author %s", author_id)
        return AuthorRead.model_validate(author)

    async def delete_author(self, author_id: int) -> bool:
        """Delete an author together with all of their books."""
        async with self._store.transaction() as session:
            author = await session.get(Author, author_id)
            if author is None:
                return False
            await session.delete(author)

        logger.info("Deleted author %s and their books", author_id)
        return True
