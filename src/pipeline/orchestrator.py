"""Run the configured generators for every book, then the deferred tasks."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial

from books.models import Book
from common.constants import EXPORT_DIR, EXPORT_PRIORITY
from common.logger import get_logger
from writers.tables import SpreadsheetExport

from .handler import BuildContext
from .registry import GeneratorRegistry
from .task_queue import PriorityTaskQueue

logger = get_logger(__name__)

ExportWriter = Callable[[Book, SpreadsheetExport], None]


def write_book_export(book: Book, export: SpreadsheetExport) -> None:
    """Write a book's spreadsheet export into its static directory."""
    written = export.write(book.static_path(EXPORT_DIR), book.modified)
    logger.info(f"book {book.id}: export has {len(export)} sheet(s), wrote {len(written)}")


@dataclass
class RunSummary:
    """Counts from one generation run."""

    books: int = 0
    generators: int = 0
    tasks: int = 0


class GenerationOrchestrator:
    """Drive generation across all books.

    Every book runs its generators in the order it declares them. Deferred
    tasks queued along the way, including spreadsheet exports, only run once
    the last book is done. The first exception stops the whole run.
    """

    def __init__(
        self,
        registry: GeneratorRegistry,
        tasks: PriorityTaskQueue | None = None,
        export_writer: ExportWriter | None = None,
    ):
        """Initialize orchestrator.

        Args:
            registry: Generators available to books
            tasks: Deferred task queue (a new one if None)
            export_writer: Writes a book's export (default: CSV sheets in the
                book's static directory)
        """
        self.registry = registry
        self.tasks = tasks if tasks is not None else PriorityTaskQueue()
        self.export_writer = export_writer or write_book_export
        self.ctx = BuildContext(tasks=self.tasks)
        # IDs whose export task is already queued; a book configured twice
        # arrives as separate Book objects sharing one ID
        self.exported: set[str] = set()

    def generate(self, book: Book) -> int:
        """Run one book's generators in declared order.

        Returns:
            Number of generators that were found and run
        """
        count = 0
        for name in book.generate:
            if self.registry.dispatch(self.ctx, book, name):
                count += 1

        if book.has_export:
            self.schedule_export(book)
        return count

    def schedule_export(self, book: Book) -> bool:
        """Queue the export finishing task, at most once per book ID.

        Returns:
            True if a task was queued, False if the book's export already was
        """
        if book.id in self.exported:
            logger.debug(f"book {book.id}: export already scheduled")
            return False

        self.exported.add(book.id)
        # Runs after most other deferred work
        self.tasks.add_priority(
            EXPORT_PRIORITY,
            book.export_once(partial(self.export_writer, book, book.get_export())),
        )
        return True

    def run(self, books: Iterable[Book]) -> RunSummary:
        """Generate every book, then drain the deferred task queue.

        Per-book state is released even when a generator or task raises.

        Args:
            books: Books in processing order

        Returns:
            RunSummary with counts for the run
        """
        summary = RunSummary()
        processed: list[Book] = []

        try:
            for book in books:
                logger.info(f"Generating book [bold]{book.id}[/bold]")
                processed.append(book)
                summary.generators += self.generate(book)
                summary.books += 1

            if len(self.tasks):
                logger.info(f"Running {len(self.tasks)} deferred task(s)")
            summary.tasks = self.tasks.drain()
        finally:
            for book in processed:
                book.release()

        return summary
