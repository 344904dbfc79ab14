"""Render every book's print view to a PDF."""

from collections.abc import Iterable
from pathlib import Path

from books.models import Book
from common.constants import PDF_SUFFIX
from common.logger import get_logger
from writers.files import write_file

from .renderer import PrintOptions, Renderer, RenderError

logger = get_logger(__name__)


def print_options(book: Book) -> PrintOptions:
    """Page layout for a book, with header and footer expanded."""
    pdf = book.pdf
    return PrintOptions(
        margin_top=pdf.margin.top,
        margin_bottom=pdf.margin.bottom,
        margin_left=pdf.margin.left,
        margin_right=pdf.margin.right,
        landscape=pdf.landscape,
        paper_width=pdf.width,
        paper_height=pdf.height,
        print_background=pdf.print_background,
        display_header_footer=not pdf.disable_header_footer,
        header_template=book.expand(pdf.header),
        footer_template=book.expand(pdf.footer),
    )


class PdfBuilder:
    """Produce one PDF per book from the served site.

    A render failure is logged and recorded for that book only; the other
    books are still rendered.
    """

    def __init__(self, renderer: Renderer, site_url: str, static_root: Path, enabled: bool = True):
        """Initialize the builder.

        Args:
            renderer: Renderer that prints a URL to PDF
            site_url: Base URL the site is served from
            static_root: Root that PDFs are written under
            enabled: When False, build() does nothing
        """
        self.renderer = renderer
        self.site_url = site_url
        self.static_root = static_root
        self.enabled = enabled

    def print_url(self, book: Book) -> str:
        return f"{self.site_url.rstrip('/')}/{book.id}/_print/"

    def output_path(self, book: Book) -> Path:
        return self.static_root / "static" / "book" / f"{book.id}{PDF_SUFFIX}"

    def generate(self, book: Book) -> bool:
        """Render one book.

        Returns:
            True if a new PDF was written, False if the existing one is fresh

        Raises:
            RenderError: If rendering failed
            OSError: If the PDF could not be written
        """
        logger.info(f"Generating PDF for {book.id}")
        data = self.renderer.render(self.print_url(book), print_options(book))
        return write_file(self.output_path(book), data, book.modified)

    def build(self, books: Iterable[Book]) -> list[str]:
        """Render every book.

        Returns:
            IDs of books whose PDF failed to render or write
        """
        if not self.enabled:
            logger.info("PDF generation disabled")
            return []

        failed = []
        for book in books:
            try:
                self.generate(book)
            except (RenderError, OSError) as e:
                logger.error(f"[red]✗[/red] PDF for book {book.id} failed: {e}")
                failed.append(book.id)
        return failed
