"""Tabular exports: single CSV tables and the per-book spreadsheet export."""

import csv
import io
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .files import write_file


@dataclass
class Table:
    """A titled table of rows."""

    title: str
    columns: list[str]
    rows: list[list[Any]] = field(default_factory=list)


def render_csv(table: Table) -> str:
    """Render a table as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(table.columns)
    writer.writerows(table.rows)
    return buffer.getvalue()


def write_csv(table: Table, path: Path, modified: datetime) -> bool:
    """Write a table as CSV if the existing file is stale.

    Args:
        table: Table to write
        path: Output path
        modified: Last modification time of the source content

    Returns:
        True if written, False if skipped
    """
    return write_file(path, render_csv(table), modified)


def sheet_filename(title: str) -> str:
    """Turn a sheet title into a safe CSV filename."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title).strip("_").lower()
    return f"{slug or 'sheet'}.csv"


class SpreadsheetExport:
    """Accumulates sheets for a book during generation.

    Generators add sheets as they produce tables; the finishing task writes
    the whole export once, after every generator has run.
    """

    def __init__(self):
        self.sheets: dict[str, Table] = {}

    def add_sheet(self, table: Table) -> None:
        """Add a sheet, replacing any earlier sheet with the same title."""
        self.sheets[table.title] = table

    def __len__(self) -> int:
        return len(self.sheets)

    def write(self, directory: Path, modified: datetime) -> list[Path]:
        """Write every sheet as a CSV file in a directory.

        Args:
            directory: Destination directory
            modified: Last modification time of the source content

        Returns:
            Paths that were actually written
        """
        written = []
        for table in self.sheets.values():
            path = directory / sheet_filename(table.title)
            if write_csv(table, path, modified):
                written.append(path)
        return written
