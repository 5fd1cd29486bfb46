"""SQLAlchemy models."""
from catalog.models.author import Author
from catalog.models.book import Book
from catalog.models.genre import Genre

__all__ = [
    "Author",
    "Book",
    "Genre",
]
