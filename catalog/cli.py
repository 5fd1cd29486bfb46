#!/usr/bin/env python3
"""
Library Catalog CLI - interactive menu over the catalog service.

Usage:
    library-catalog                          # Interactive mode, seeded database
    library-catalog --no-seed                # Skip demo data
    library-catalog --database-url sqlite:///./other.db
"""
import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from catalog.config import settings
from catalog.core.exceptions import CatalogException, NotFoundError
from catalog.core.logging import setup_logging
from catalog.database import build_engine, build_session_factory, close_db, init_db
from catalog.schemas.book import BookCreate, BookRead
from catalog.seed import DataSeeder
from catalog.services.library_service import LibraryService
from catalog.services.query_builder import SORT_KEYS
from catalog.store import SqlAlchemyStore


# ============================================================================
# COLORS AND FORMATTING
# ============================================================================

class Colors:
    """ANSI color codes for terminal output."""
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'


def print_header(text: str):
    """Print a header."""
    print(f"\n{Colors.BOLD}{Colors.HEADER}{'='*60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}  {text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{'='*60}{Colors.END}\n")


def print_section(text: str):
    """Print a section header."""
    print(f"\n{Colors.BOLD}{Colors.CYAN}{'-'*40}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.CYAN}{'-'*40}{Colors.END}")


def print_success(text: str):
    print(f"{Colors.GREEN}✓ {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}✗ {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.BLUE}ℹ {text}{Colors.END}")


def print_book(book: BookRead):
    """Print one book with its author and genre."""
    print(f"[{book.id}] {Colors.BOLD}{book.title}{Colors.END}")
    print(f"   Author: {book.author.full_name if book.author else 'Unknown'}")
    print(f"   Genre: {book.genre.name if book.genre else '-'}")
    print(f"   Price: ${book.price:.2f}")
    print(f"   Year: {book.publication_year}")


# ============================================================================
# INPUT HELPERS
# ============================================================================

def ask(label: str) -> str:
    return input(f"{Colors.CYAN}{label}: {Colors.END}").strip()


def ask_int(label: str) -> Optional[int]:
    value = ask(label)
    try:
        return int(value)
    except ValueError:
        print_error(f"Invalid number: {value!r}")
        return None


def ask_decimal(label: str) -> Optional[Decimal]:
    value = ask(label)
    try:
        return Decimal(value)
    except InvalidOperation:
        print_error(f"Invalid amount: {value!r}")
        return None


# ============================================================================
# MENU ACTIONS
# ============================================================================

async def view_all_books(service: LibraryService):
    print_section("All Books")
    books = await service.get_all_books()
    if not books:
        print_info("No books found.")
        return
    for book in books:
        print_book(book)


async def view_cached_books(service: LibraryService):
    print_section("All Books (cached)")
    books = await service.get_cached_books()
    if not books:
        print_info("No books found.")
        return
    for book in books:
        print_book(book)
    print_info("Listing may lag recent changes by up to "
               f"{service.books.cache.ttl:.0f} seconds")


async def add_book(service: LibraryService):
    print_section("Add New Book")

    print("Available authors:")
    for author in await service.list_authors():
        print(f"  {author.id}. {author.full_name}")
    author_id = ask_int("Author ID")
    if author_id is None:
        return

    print("\nAvailable genres:")
    for genre in await service.list_genres():
        print(f"  {genre.id}. {genre.name}")
    genre_id = ask_int("Genre ID")
    if genre_id is None:
        return

    title = ask("Title")
    isbn = ask("ISBN")
    year = ask_int("Publication year")
    if year is None:
        return
    price = ask_decimal("Price")
    if price is None:
        return

    data = BookCreate(
        title=title,
        isbn=isbn,
        publication_year=year,
        price=price,
        author_id=author_id,
        genre_id=genre_id,
    )
    book = await service.add_book(data)
    print_success(f"Book added: {book.display_info}")


async def search_books(service: LibraryService):
    print_section("Search Books")
    term = ask("Search term")
    if not term:
        print_error("Please enter a search term.")
        return

    books = await service.search_books(term)
    if not books:
        print_info("No books found.")
        return
    print(f"\nFound {len(books)} book(s):")
    for book in books:
        print(f"- {book.display_info}")


async def delete_book(service: LibraryService):
    print_section("Delete Book")
    book_id = ask_int("Book ID to delete")
    if book_id is None:
        return
    if not await service.delete_book(book_id):
        raise NotFoundError("Book", book_id)
    print_success("Book deleted!")


async def view_statistics(service: LibraryService):
    print_section("Statistics")
    stats = await service.compute_statistics()
    print(f"Books:        {stats.total_books} "
          f"({stats.available_books} available, {stats.unavailable_books} unavailable)")
    print(f"Authors:      {stats.total_authors}")
    print(f"Genres:       {stats.total_genres}")
    print(f"Avg price:    ${stats.average_price:.2f}")
    print(f"Total value:  ${await service.total_catalog_value():.2f}")
    print(f"Most expensive: {stats.most_expensive}")
    print(f"Cheapest:       {stats.cheapest}")

    if stats.books_by_year:
        print(f"\n{Colors.BOLD}By year{Colors.END}")
        for row in stats.books_by_year:
            print(f"  {row.year}: {row.count} book(s), avg ${row.average_price:.2f}")
    if stats.books_by_genre:
        print(f"\n{Colors.BOLD}By genre{Colors.END}")
        for row in stats.books_by_genre:
            print(f"  {row.genre}: {row.count} book(s), avg ${row.average_price:.2f}")


async def browse_pages(service: LibraryService):
    print_section("Browse")
    sort_key = ask(f"Sort by ({'/'.join(SORT_KEYS)})") or "title"
    page_number = 1
    while True:
        page = await service.paginate(page_number, settings.default_page_size, sort_key)
        print(f"\nPage {page.page_number} of {max(page.total_pages, 1)} "
              f"({page.total_count} book(s))")
        for book in page.items:
            print(f"- {book.display_info} ${book.price:.2f}")

        choice = ask("[n]ext, [p]revious, [q]uit").lower()
        if choice == "n" and page_number < page.total_pages:
            page_number += 1
        elif choice == "p" and page_number > 1:
            page_number -= 1
        elif choice == "q":
            return


async def transfer_ownership(service: LibraryService):
    print_section("Transfer Book Ownership")
    book_id = ask_int("Book ID")
    author_id = ask_int("New author ID") if book_id is not None else None
    if author_id is None:
        return
    result = await service.transfer_book_ownership(book_id, author_id)
    if result:
        print_success("Ownership transferred.")
    else:
        print_error(f"Transfer failed: {result.message}")


async def apply_discount(service: LibraryService):
    print_section("Genre Discount")
    for genre in await service.list_genres():
        print(f"  {genre.id}. {genre.name}")
    genre_id = ask_int("Genre ID")
    percent = ask_decimal("Discount percent") if genre_id is not None else None
    if percent is None:
        return
    result = await service.apply_discount_to_genre(genre_id, percent)
    if result:
        print_success(f"Discount applied to {result.affected} book(s).")
    else:
        print_error(result.message)


MENU = [
    ("View all books", view_all_books),
    ("Add a book", add_book),
    ("Search books", search_books),
    ("Delete a book", delete_book),
    ("View statistics", view_statistics),
    ("Browse pages", browse_pages),
    ("Transfer book ownership", transfer_ownership),
    ("Apply genre discount", apply_discount),
    ("View all books (cached)", view_cached_books),
]


async def show_menu(service: LibraryService):
    """Main loop; exits on the last menu entry."""
    exit_choice = str(len(MENU) + 1)
    while True:
        print_header("Main Menu")
        for index, (label, _) in enumerate(MENU, start=1):
            print(f"{index}. {label}")
        print(f"{exit_choice}. Exit")

        choice = input(f"\n{Colors.BOLD}Choose an option: {Colors.END}").strip()
        if choice == exit_choice:
            print("Goodbye!")
            return
        if not choice.isdigit() or not 1 <= int(choice) <= len(MENU):
            print_error("Invalid choice. Try again.")
            continue

        _, action = MENU[int(choice) - 1]
        try:
            await action(service)
        except CatalogException as e:
            print_error(e.message)


async def run(database_url: str, seed: bool):
    engine = build_engine(database_url, echo=settings.debug)
    try:
        await init_db(engine)
        service = LibraryService(SqlAlchemyStore(build_session_factory(engine)))
        if seed:
            await DataSeeder(service).seed()
        await show_menu(service)
    finally:
        await close_db(engine)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Library Catalog - browse and manage books, authors and genres",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help=f"Database URL (default: {settings.database_url})",
    )
    parser.add_argument(
        "--no-seed",
        action="store_true",
        help="Do not insert demo data into empty tables",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Logging level (default: %(default)s)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level)
    print_header("Library Management System")

    try:
        asyncio.run(run(args.database_url, seed=settings.seed_on_start and not args.no_seed))
    except KeyboardInterrupt:
        print(f"\n\n{Colors.YELLOW}Interrupted by user{Colors.END}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
