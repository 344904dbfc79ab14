"""Book model and configuration loading."""

from .models import Book, BookCopyright, Margins, PDFOptions
from .shelf import BookShelf, ConfigError, book_from_dict, load_bookshelf

__all__ = [
    "Book",
    "BookCopyright",
    "Margins",
    "PDFOptions",
    "BookShelf",
    "ConfigError",
    "book_from_dict",
    "load_bookshelf",
]
