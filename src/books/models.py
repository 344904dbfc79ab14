"""Data models for books and their PDF layout."""

import os
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import Any

from writers.tables import SpreadsheetExport

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

# Rendered by the browser in place of the page title
DEFAULT_TITLE = "<span class='title'></span>"


@dataclass
class BookCopyright:
    """Attribution shown on a book or its front image."""

    title: str = ""
    sub_title: str = ""
    author: str = ""
    sub_author: str = ""
    copyright: str = ""


@dataclass
class Margins:
    """Page margins in inches."""

    top: float = 0.4
    bottom: float = 0.4
    left: float = 0.4
    right: float = 0.4


@dataclass
class PDFOptions:
    """Page layout used when printing a book to PDF.

    Attributes:
        margin: Page margins in inches
        landscape: Print in landscape orientation
        width: Paper width in inches
        height: Paper height in inches
        header: Header template, may contain ${...} placeholders
        footer: Footer template, may contain ${...} placeholders
        print_background: Include background graphics
        disable_header_footer: Suppress header and footer entirely
    """

    margin: Margins = field(default_factory=Margins)
    landscape: bool = False
    width: float = 8.27
    height: float = 11.69
    header: str = ""
    footer: str = ""
    print_background: bool = True
    disable_header_footer: bool = False

    @classmethod
    def from_dict(
        cls, data: dict[str, Any] | None, base: "PDFOptions | None" = None
    ) -> "PDFOptions":
        """Build options from configuration, overlaying a base set.

        Args:
            data: Mapping using the configuration keys (camelCase accepted)
            base: Defaults for any key missing from data

        Returns:
            New PDFOptions instance
        """
        base = base or cls()
        data = data or {}
        aliases = {
            "printBackground": "print_background",
            "disableHeaderFooter": "disable_header_footer",
        }
        values = {f.name: getattr(base, f.name) for f in fields(cls)}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name == "margin":
                margin = {f.name: getattr(base.margin, f.name) for f in fields(Margins)}
                margin.update(value or {})
                values["margin"] = Margins(**{k: float(v) for k, v in margin.items()})
            elif name in values:
                values[name] = value
        return cls(**values)


@dataclass(eq=False)
class Book:
    """A documentation unit with its own content directory.

    Books are built from configuration before generation starts. Generators
    then attach extracted data and an optional spreadsheet export; the export
    is written at most once per book by a deferred finishing task.
    """

    id: str
    title: str = ""
    sub_title: str = ""
    author: str = ""
    sub_author: str = ""
    copyright: str = ""
    front_image: BookCopyright = field(default_factory=BookCopyright)
    pdf: PDFOptions = field(default_factory=PDFOptions)
    generate: list[str] = field(default_factory=list)
    content_root: Path = Path("content")
    static_root: Path = Path("static")
    export_written: bool = field(default=False, init=False)
    _modified: datetime | None = field(default=None, init=False, repr=False)
    _export: SpreadsheetExport | None = field(default=None, init=False, repr=False)

    @property
    def content_path(self) -> Path:
        """Directory holding this book's content."""
        return Path(self.content_root) / self.id

    def static_path(self, name: str) -> Path:
        """Path of a downloadable artefact belonging to this book."""
        return Path(self.static_root) / "static" / "book" / self.id / name

    @property
    def modified(self) -> datetime:
        """Newest modification time of any file in the book's content.

        Computed on first access and cached for the rest of the run.
        """
        if self._modified is None:
            newest = EPOCH
            for root, _dirs, files in os.walk(self.content_path):
                for name in files:
                    mtime = datetime.fromtimestamp(
                        os.stat(os.path.join(root, name)).st_mtime, tz=timezone.utc
                    )
                    if mtime > newest:
                        newest = mtime
            self._modified = newest
        return self._modified

    def expand(self, template: str) -> str:
        """Substitute book placeholders in a header or footer template."""
        replacements: dict[str, Callable[[], str]] = {
            "${modified}": lambda: format_datetime(self.modified, usegmt=True),
            "${title}": lambda: self.title or DEFAULT_TITLE,
            "${author}": lambda: self.author,
            "${copyright}": lambda: self.copyright,
        }
        for placeholder, value in replacements.items():
            # Only compute values that are used, ${modified} walks the tree
            if placeholder in template:
                template = template.replace(placeholder, value())
        return template

    @property
    def has_export(self) -> bool:
        return self._export is not None

    def get_export(self) -> SpreadsheetExport:
        """Get the book's spreadsheet export, attaching one if needed."""
        if self._export is None:
            self._export = SpreadsheetExport()
        return self._export

    def set_export(self, export: SpreadsheetExport | None) -> None:
        self._export = export

    def export_once(self, task: Callable[[], None]) -> Callable[[], None]:
        """Wrap a task so that it runs at most once for this book.

        The export_written flag is set before the task runs, so a failing
        write is not retried by a later copy of the same task.
        """

        def run() -> None:
            if self.export_written:
                return
            self.export_written = True
            task()

        return run

    def release(self) -> None:
        """Drop per-run state that is no longer needed."""
        self._export = None
