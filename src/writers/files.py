"""Freshness-checked file writes.

Generated outputs are only rewritten when the book content they derive from
is newer than the file already on disk.
"""

from datetime import datetime, timezone
from pathlib import Path

from common.logger import get_logger

logger = get_logger(__name__)


def file_modified(path: Path) -> datetime | None:
    """Get the modification time of a file as an aware UTC datetime.

    Args:
        path: File to inspect

    Returns:
        Modification time, or None if the file does not exist
    """
    if not path.exists():
        return None
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def is_stale(path: Path, modified: datetime) -> bool:
    """Check whether an output file needs rewriting.

    Args:
        path: Output file
        modified: Last modification time of the source content

    Returns:
        True if the file is missing or older than the source content
    """
    existing = file_modified(path)
    return existing is None or existing < modified


def write_file(path: Path, content: str | bytes, modified: datetime) -> bool:
    """Write an output file unless the existing copy is up to date.

    Args:
        path: Output file, parent directories are created as needed
        content: Text (written as UTF-8) or raw bytes
        modified: Last modification time of the source content

    Returns:
        True if the file was written, False if it was skipped as fresh
    """
    if not is_stale(path, modified):
        logger.debug(f"Skipping {path}, already up to date")
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")

    logger.info(f"Wrote {path}")
    return True
