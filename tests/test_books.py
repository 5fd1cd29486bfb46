"""Book CRUD and query tests."""
from decimal import Decimal

import pytest

from catalog.core.exceptions import ConstraintViolationError, ValidationError
from catalog.schemas import AuthorCreate
from catalog.services.book_service import BookService
from conftest import make_book


class UnreachableStore:
    """Store that fails the test if any session is opened."""

    def session(self):
        raise AssertionError("store should not be touched")

    def transaction(self):
        raise AssertionError("store should not be touched")


def titles(books):
    return [b.title for b in books]


@pytest.mark.asyncio
async def test_get_all_books_loads_author_and_genre(service, sample_catalog):
    books = await service.get_all_books()

    assert len(books) == 5
    for book in books:
        assert book.author is not None
        assert book.author.id == book.author_id
        assert book.genre is not None
        assert book.genre.id == book.genre_id


@pytest.mark.asyncio
async def test_get_book_by_id(service, sample_catalog):
    expected = sample_catalog["books"]["1984"]

    book = await service.get_book_by_id(expected.id)

    assert book.title == "1984"
    assert book.author.full_name == "George Orwell"
    assert book.genre.name == "Fiction"
    assert book.display_info == "1984 by George Orwell (1949)"
    assert await service.get_book_by_id(999) is None


@pytest.mark.asyncio
async def test_get_books_by_author(service, sample_catalog):
    orwell = sample_catalog["authors"]["orwell"]
    books = await service.get_books_by_author(orwell.id)
    assert titles(books) == ["1984", "Animal Farm"]


@pytest.mark.asyncio
async def test_search_matches_title_case_insensitively(service, sample_catalog):
    assert titles(await service.search_books("FOUND")) == ["Foundation"]
    assert titles(await service.search_books("robot")) == ["I, Robot"]


@pytest.mark.asyncio
async def test_search_matches_author_name(service):
    orwell = await service.add_author(AuthorCreate(first_name="George", last_name="Orwell"))
    asimov = await service.add_author(AuthorCreate(first_name="Isaac", last_name="Asimov"))
    await service.add_book(make_book("1984", "978-0451524935", 1949, "9.99", orwell.id))
    await service.add_book(make_book("Foundation", "978-0553293357", 1951, "8.99", asimov.id))

    for term in ("orwell", "ORWELL", "Orwell", "george orwell"):
        assert titles(await service.search_books(term)) == ["1984"]


@pytest.mark.asyncio
async def test_search_results_ordered_by_title(service, sample_catalog):
    books = await service.search_books("o")
    assert titles(books) == sorted(titles(books))


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(service, sample_catalog):
    assert await service.search_books("%") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("term", ["", "   ", None])
async def test_blank_search_never_touches_store(term):
    books = BookService(UnreachableStore())
    assert await books.search_books(term) == []


@pytest.mark.asyncio
async def test_price_range_is_inclusive_and_sorted_by_price(service, sample_catalog):
    books = await service.get_books_by_price_range(Decimal("6.99"), Decimal("8.99"))
    assert titles(books) == ["I, Robot", "Animal Farm", "Murder on the Orient Express"]


@pytest.mark.asyncio
async def test_books_by_year(service, sample_catalog):
    assert titles(await service.get_books_by_year(1949)) == ["1984"]
    assert await service.get_books_by_year(2000) == []


@pytest.mark.asyncio
async def test_books_by_genre_name_is_case_insensitive(service, sample_catalog):
    books = await service.get_books_by_genre("science FICTION")
    assert titles(books) == ["Foundation", "I, Robot"]
    assert all(b.genre.name == "Science Fiction" for b in books)


@pytest.mark.asyncio
async def test_books_published_after_is_strict_and_descending(service, sample_catalog):
    books = await service.get_books_published_after(1949)

    assert titles(books) == ["Foundation", "I, Robot"]
    assert books[0].author.full_name == "Isaac Asimov"
    assert books[0].price == Decimal("12.99")


@pytest.mark.asyncio
async def test_update_replaces_fields_and_keeps_identity(service, sample_catalog):
    original = sample_catalog["books"]["1984"]
    asimov = sample_catalog["authors"]["asimov"]

    updated = await service.update_book(
        original.id,
        make_book("Nineteen Eighty-Four", "978-0451524935", 1949, "11.50", asimov.id, None, False),
    )

    assert updated.id == original.id
    assert updated.added_date == original.added_date
    assert updated.title == "Nineteen Eighty-Four"
    assert updated.price == Decimal("11.50")
    assert updated.is_available is False
    assert updated.author.full_name == "Isaac Asimov"
    assert updated.genre is None


@pytest.mark.asyncio
async def test_update_rejects_isbn_of_another_book(service, sample_catalog):
    book = sample_catalog["books"]["1984"]
    with pytest.raises(ValidationError):
        await service.update_book(
            book.id,
            make_book("1984", "978-0553293357", 1949, "9.99", book.author_id),
        )


@pytest.mark.asyncio
async def test_update_missing_book_returns_none(service, sample_catalog):
    orwell = sample_catalog["authors"]["orwell"]
    data = make_book("Ghost", "000-0000000001", 2000, "1.00", orwell.id)
    assert await service.update_book(999, data) is None


@pytest.mark.asyncio
async def test_delete_book(service, sample_catalog):
    book = sample_catalog["books"]["Animal Farm"]

    assert await service.delete_book(book.id) is True
    assert await service.get_book_by_id(book.id) is None
    assert await service.delete_book(book.id) is False


@pytest.mark.asyncio
async def test_store_unique_index_is_final_authority(service, sample_catalog, monkeypatch):
    """A write that slips past the pre-check is still rejected by the store."""
    orwell = sample_catalog["authors"]["orwell"]

    async def always_unique(isbn, exclude_id=None):
        return True

    monkeypatch.setattr(service.validator, "is_isbn_unique", always_unique)

    with pytest.raises(ConstraintViolationError):
        await service.add_book(make_book("Copy", "978-0451524935", 1949, "1.00", orwell.id))
    assert len(await service.get_all_books()) == 5


@pytest.mark.asyncio
async def test_returned_values_are_frozen(service, sample_catalog):
    book = (await service.get_all_books())[0]
    with pytest.raises(Exception):
        book.title = "changed"
