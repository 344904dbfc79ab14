"""Reference pages: generated HTML content with YAML front matter."""

from collections.abc import Callable
from html import escape
from pathlib import Path
from typing import Any

import yaml

from common.constants import REFERENCE_DIR


def reference_filename(content_path: Path, name: str, filename: str = "_index.html") -> Path:
    """Path of a generated reference page inside a book's content."""
    return content_path / REFERENCE_DIR / name / filename


def front_matter(
    title: str,
    description: str,
    layout: str = "manual",
    weight: int = 10,
    extra: dict[str, Any] | None = None,
) -> str:
    """Build a YAML front matter block, fences included."""
    meta: dict[str, Any] = {
        "type": layout,
        "title": title,
        "linkTitle": title,
        "description": description,
        "weight": weight,
    }
    if extra:
        meta.update(extra)
    body = yaml.safe_dump(meta, sort_keys=False, allow_unicode=True)
    return f"---\n{body}---\n"


Paginator = Callable[[int, list[Any], list[Any]], bool]


def paginate_by(key: Callable[[list[Any]], Any]) -> Paginator:
    """Paginator starting a new table whenever key(row) changes."""

    def paginator(row_count: int, previous: list[Any], row: list[Any]) -> bool:
        return key(previous) != key(row)

    return paginator


def table_header(columns: list[str]) -> list[str]:
    """Header lines for a table with the given column titles."""
    if not columns:
        return []
    cells = "".join(f"<th>{escape(str(c))}</th>" for c in columns)
    return [f"<thead><tr>{cells}</tr></thead>"]


def html_table(
    css_class: str,
    columns: list[str],
    rows: list[list[Any]],
    paginator: Paginator | None = None,
    header: Callable[[int], list[str]] | None = None,
) -> list[str]:
    """Render rows as HTML tables, each wrapped in a classed div.

    Before every row except the first, paginator(row_count, previous, row) is
    asked whether a new table should start there. A break closes the current
    table and opens another one with the header repeated.

    Args:
        css_class: Class of the wrapping div
        columns: Column titles for the default header
        rows: Table rows, values are escaped
        paginator: Decides where tables break (default: a single table)
        header: Returns header lines for a table starting at row_count
            (default: a thead built from columns)

    Returns:
        HTML lines
    """
    lines: list[str] = []

    def start_page(row_count: int) -> None:
        lines.append(f"<div class='{escape(css_class)}'><table>")
        lines.extend(header(row_count) if header is not None else table_header(columns))
        lines.append("<tbody>")

    def end_page() -> None:
        lines.append("</tbody></table></div>")

    start_page(0)
    previous: list[Any] | None = None
    for row_count, row in enumerate(rows):
        if previous is not None and paginator is not None and paginator(row_count, previous, row):
            end_page()
            start_page(row_count)
        cells = "".join(f"<td>{escape(str(v))}</td>" for v in row)
        lines.append(f"<tr>{cells}</tr>")
        previous = row
    end_page()
    return lines


def reference_page(
    title: str,
    description: str,
    body: list[str] | None = None,
    extra: dict[str, Any] | None = None,
    layout: str = "manual",
    weight: int = 10,
) -> str:
    """Assemble a complete reference page.

    Args:
        title: Page title
        description: Page description
        body: HTML lines placed after the front matter
        extra: Additional front matter keys
        layout: Page type used by the site theme
        weight: Menu ordering weight

    Returns:
        Page text
    """
    page = front_matter(title, description, layout=layout, weight=weight, extra=extra)
    if body:
        page += "\n".join(body) + "\n"
    return page
