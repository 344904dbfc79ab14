"""Load the book configuration.

The configuration is a YAML file of the form::

    site:
      url: http://localhost:1313/
    pdf:                    # defaults for every book
      footer: "<span>${title}</span>"
    books:
      - id: "6502"
        title: 6502 Reference
        generate: [opcodes]
        pdf:
          landscape: true
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from common.logger import get_logger

from .models import Book, BookCopyright, PDFOptions

logger = get_logger(__name__)


class ConfigError(Exception):
    """Book configuration is missing or malformed."""

    pass


@dataclass
class BookShelf:
    """All configured books plus site-wide settings."""

    books: list[Book] = field(default_factory=list)
    site_url: str = "http://localhost:1313/"
    pdf_defaults: PDFOptions = field(default_factory=PDFOptions)

    def select(self, book_ids: list[str] | None) -> list[Book]:
        """Books matching the given IDs, in configuration order.

        Args:
            book_ids: IDs to keep; None or empty keeps every book

        Raises:
            ConfigError: If an ID is not configured
        """
        if not book_ids:
            return list(self.books)

        known = {book.id for book in self.books}
        unknown = [book_id for book_id in book_ids if book_id not in known]
        if unknown:
            raise ConfigError(f"Unknown book(s): {', '.join(unknown)}")

        return [book for book in self.books if book.id in book_ids]


def _copyright(data: dict[str, Any]) -> dict[str, str]:
    keys = {
        "title": "title",
        "subTitle": "sub_title",
        "author": "author",
        "subAuthor": "sub_author",
        "copyright": "copyright",
    }
    return {name: str(data[key]) for key, name in keys.items() if data.get(key) is not None}


def book_from_dict(
    data: dict[str, Any],
    pdf_defaults: PDFOptions | None = None,
    content_root: Path = Path("content"),
    static_root: Path = Path("static"),
) -> Book:
    """Build a Book from one entry of the configuration.

    Raises:
        ConfigError: If the entry has no id or a malformed generator list
    """
    if not isinstance(data, dict) or not data.get("id"):
        raise ConfigError(f"Book entry without an id: {data!r}")

    generate = data.get("generate") or []
    if isinstance(generate, str):
        generate = [generate]
    if not isinstance(generate, list):
        raise ConfigError(f"Book {data['id']}: 'generate' must be a list")

    return Book(
        id=str(data["id"]),
        front_image=BookCopyright(**_copyright(data.get("frontImage") or {})),
        pdf=PDFOptions.from_dict(data.get("pdf"), base=pdf_defaults),
        generate=[str(name) for name in generate],
        content_root=content_root,
        static_root=static_root,
        **_copyright(data),
    )


def load_bookshelf(
    path: Path,
    content_root: Path = Path("content"),
    static_root: Path = Path("static"),
    site_url: str | None = None,
) -> BookShelf:
    """Load the book configuration from a YAML file.

    Args:
        path: Configuration file
        content_root: Root of the per-book content directories
        static_root: Root that artefacts are written under
        site_url: Site URL used when the file does not set site.url

    Returns:
        Loaded BookShelf

    Raises:
        ConfigError: If the file is missing or malformed
    """
    if not path.exists():
        raise ConfigError(f"Book configuration not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level")

    shelf = BookShelf()
    if site_url:
        shelf.site_url = site_url
    site = data.get("site") or {}
    if site.get("url"):
        shelf.site_url = str(site["url"])
    shelf.pdf_defaults = PDFOptions.from_dict(data.get("pdf"))

    for entry in data.get("books") or []:
        shelf.books.append(
            book_from_dict(
                entry,
                pdf_defaults=shelf.pdf_defaults,
                content_root=content_root,
                static_root=static_root,
            )
        )

    logger.debug(f"Loaded {len(shelf.books)} book(s) from {path}")
    return shelf
