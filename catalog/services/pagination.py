"""Sorted, windowed views of the catalog."""
import math

from catalog.core.exceptions import ValidationError
from catalog.core.logging import get_logger
from catalog.schemas.book import BookRead
from catalog.schemas.common import Page
from catalog.services.query_builder import SORT_TITLE, BookQuery
from catalog.store import CatalogStore

logger = get_logger("pagination")


class Paginator:
    """Translates page number, size and sort key into a bounded slice."""

    def __init__(self, store: CatalogStore):
        self._store = store

    async def paginate(
        self,
        page_number: int = 1,
        page_size: int = 10,
        sort_key: str = SORT_TITLE,
    ) -> Page[BookRead]:
        """Get one page of books.

        Sort keys: ``title`` (default, also used for unknown keys), ``price``
        ascending, ``year`` descending and ``author`` by last then first name.
        A page past the end has no items but still reports the totals.
        """
        if page_number < 1:
            raise ValidationError("Page number must be at least 1.", field="page_number")
        if page_size < 1:
            raise ValidationError("Page size must be at least 1.", field="page_size")

        query = BookQuery()
        async with self._store.session() as session:
            total_count = await query.count(session)
            books = await query.sorted_by(sort_key).window(page_number, page_size).all(session)
            items = [BookRead.model_validate(book) for book in books]

        total_pages = math.ceil(total_count / page_size)
        logger.debug(
            "Page %d/%d (size %d, sort %s): %d item(s)",
            page_number, total_pages, page_size, sort_key, len(items),
        )
        return Page[BookRead](
            items=items,
            total_count=total_count,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
        )
