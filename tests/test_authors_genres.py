"""Author and genre service tests."""
from datetime import date

import pytest
from pydantic import ValidationError as SchemaValidationError

from catalog.schemas import AuthorCreate, GenreCreate


@pytest.mark.asyncio
async def test_add_and_get_author(service):
    created = await service.add_author(
        AuthorCreate(first_name="Ursula", last_name="Le Guin", birth_date=date(1929, 10, 21), country="USA")
    )

    fetched = await service.get_author(created.id)
    assert fetched == created
    assert fetched.full_name == "Ursula Le Guin"
    assert fetched.birth_date == date(1929, 10, 21)
    assert await service.get_author(999) is None


def test_author_names_are_required():
    with pytest.raises(SchemaValidationError):
        AuthorCreate(first_name="", last_name="Orwell")


@pytest.mark.asyncio
async def test_authors_listed_by_last_then_first_name(service, sample_catalog):
    await service.add_author(AuthorCreate(first_name="Aaron", last_name="Asimov"))

    names = [a.full_name for a in await service.list_authors()]
    assert names == ["Aaron Asimov", "Isaac Asimov", "Agatha Christie", "George Orwell"]


@pytest.mark.asyncio
async def test_update_author(service, sample_catalog):
    orwell = sample_catalog["authors"]["orwell"]

    updated = await service.update_author(
        orwell.id, AuthorCreate(first_name="Eric", last_name="Blair", country="UK")
    )

    assert updated.id == orwell.id
    assert updated.full_name == "Eric Blair"
    book = await service.get_book_by_id(sample_catalog["books"]["1984"].id)
    assert book.display_info == "1984 by Eric Blair (1949)"
    assert await service.update_author(999, AuthorCreate(first_name="A", last_name="B")) is None


@pytest.mark.asyncio
async def test_deleting_author_deletes_their_books(service, sample_catalog):
    orwell = sample_catalog["authors"]["orwell"]

    assert await service.delete_author(orwell.id) is True

    assert await service.get_books_by_author(orwell.id) == []
    remaining = {b.title for b in await service.get_all_books()}
    assert remaining == {"Foundation", "I, Robot", "Murder on the Orient Express"}
    assert await service.delete_author(orwell.id) is False


@pytest.mark.asyncio
async def test_genre_crud(service):
    genre = await service.add_genre(GenreCreate(name="Poetry", description="Verse"))

    assert await service.get_genre(genre.id) == genre
    renamed = await service.update_genre(genre.id, GenreCreate(name="Verse"))
    assert renamed.name == "Verse"
    assert renamed.description is None
    assert await service.update_genre(999, GenreCreate(name="X")) is None
    assert await service.delete_genre(genre.id) is True
    assert await service.get_genre(genre.id) is None
    assert await service.delete_genre(genre.id) is False


@pytest.mark.asyncio
async def test_genres_listed_by_name(service, sample_catalog):
    names = [g.name for g in await service.list_genres()]
    assert names == ["Fiction", "Mystery", "Science Fiction"]


@pytest.mark.asyncio
async def test_deleting_genre_keeps_its_books(service, sample_catalog):
    fiction = sample_catalog["genres"]["fiction"]
    book = sample_catalog["books"]["1984"]

    assert await service.delete_genre(fiction.id) is True

    kept = await service.get_book_by_id(book.id)
    assert kept is not None
    assert kept.genre_id is None
    assert kept.genre is None
    assert len(await service.get_all_books()) == 5
