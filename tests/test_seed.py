"""Demo data seeding tests."""
import pytest

from catalog.seed import AUTHORS, BOOKS, GENRES, DataSeeder
from catalog.schemas import AuthorCreate


@pytest.mark.asyncio
async def test_seed_fills_empty_catalog(service):
    await DataSeeder(service).seed()

    assert len(await service.list_authors()) == len(AUTHORS) == 5
    assert len(await service.list_genres()) == len(GENRES) == 5
    assert len(await service.get_all_books()) == len(BOOKS) == 6

    shining = await service.search_books("shining")
    assert shining[0].display_info == "The Shining by Stephen King (1977)"
    assert shining[0].genre.name == "Horror"


@pytest.mark.asyncio
async def test_seed_is_idempotent(service):
    seeder = DataSeeder(service)
    await seeder.seed()
    await seeder.seed()

    assert len(await service.list_authors()) == 5
    assert len(await service.get_all_books()) == 6


@pytest.mark.asyncio
async def test_seed_skips_populated_tables(service):
    await service.add_author(AuthorCreate(first_name="George", last_name="Orwell"))

    await DataSeeder(service).seed()

    assert len(await service.list_authors()) == 1
    books = await service.get_all_books()
    assert {b.author.last_name for b in books} == {"Orwell"}
    assert len(books) == 2
