"""Pagination tests."""
import pytest

from catalog.core.exceptions import ValidationError


def titles(page):
    return [book.title for book in page.items]


@pytest.mark.asyncio
async def test_second_page_sorted_by_price(service, sample_catalog):
    page = await service.paginate(page_number=2, page_size=2, sort_key="price")

    assert titles(page) == ["Murder on the Orient Express", "1984"]
    assert page.total_count == 5
    assert page.total_pages == 3
    assert page.page_number == 2
    assert page.page_size == 2


@pytest.mark.asyncio
async def test_default_sort_is_title(service, sample_catalog):
    page = await service.paginate(1, 10)

    assert titles(page) == ["1984", "Animal Farm", "Foundation", "I, Robot", "Murder on the Orient Express"]
    assert page.total_pages == 1


@pytest.mark.asyncio
async def test_year_sort_is_newest_first(service, sample_catalog):
    page = await service.paginate(1, 3, "year")
    assert [book.publication_year for book in page.items] == [1951, 1950, 1949]


@pytest.mark.asyncio
async def test_author_sort_uses_last_name(service, sample_catalog):
    page = await service.paginate(1, 10, "author")

    assert [book.author.last_name for book in page.items] == ["Asimov", "Asimov", "Christie", "Orwell", "Orwell"]
    assert titles(page)[:2] == ["Foundation", "I, Robot"]


@pytest.mark.asyncio
@pytest.mark.parametrize("sort_key", ["rating", "", None])
async def test_unknown_sort_key_falls_back_to_title(service, sample_catalog, sort_key):
    page = await service.paginate(1, 2, sort_key)
    assert titles(page) == ["1984", "Animal Farm"]


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty(service, sample_catalog):
    page = await service.paginate(page_number=4, page_size=2)

    assert page.items == []
    assert page.total_count == 5
    assert page.total_pages == 3


@pytest.mark.asyncio
async def test_empty_catalog_has_no_pages(service):
    page = await service.paginate()

    assert page.items == []
    assert page.total_count == 0
    assert page.total_pages == 0


@pytest.mark.asyncio
async def test_pages_cover_catalog_without_overlap(service, sample_catalog):
    seen = []
    for number in range(1, 4):
        seen.extend(titles(await service.paginate(number, 2, "year")))

    assert len(seen) == 5
    assert len(set(seen)) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("page_number, page_size", [(0, 10), (-1, 10), (1, 0)])
async def test_invalid_page_arguments(service, page_number, page_size):
    with pytest.raises(ValidationError):
        await service.paginate(page_number, page_size)
