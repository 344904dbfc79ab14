"""Output writers used by generators and finishing tasks."""

from .files import is_stale, write_file
from .pages import html_table, paginate_by, reference_filename, reference_page
from .tables import SpreadsheetExport, Table, render_csv, write_csv

__all__ = [
    "is_stale",
    "write_file",
    "html_table",
    "paginate_by",
    "reference_filename",
    "reference_page",
    "SpreadsheetExport",
    "Table",
    "render_csv",
    "write_csv",
]
