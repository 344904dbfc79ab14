"""One-shot gate for expensive per-book extraction."""

from common.logger import get_logger

logger = get_logger(__name__)


class ExtractionGuard:
    """Set of book IDs a subsystem has already extracted.

    Membership only ever grows during a run. Claiming a book marks it before
    the extraction starts, so a re-entrant request for the same book is
    turned away even while the first scan is still running.
    """

    def __init__(self, subsystem: str):
        self.subsystem = subsystem
        self._seen: set[str] = set()

    def contains(self, book_id: str) -> bool:
        return book_id in self._seen

    def add(self, book_id: str) -> None:
        self._seen.add(book_id)

    def __contains__(self, book_id: str) -> bool:
        return self.contains(book_id)

    def __len__(self) -> int:
        return len(self._seen)

    def claim(self, book_id: str) -> bool:
        """Mark a book as extracted.

        Args:
            book_id: Book about to be extracted

        Returns:
            True if the caller should extract, False if it already has been
        """
        if self.contains(book_id):
            logger.warning(f"{self.subsystem}: book {book_id} already extracted, skipping")
            return False

        self.add(book_id)
        return True
