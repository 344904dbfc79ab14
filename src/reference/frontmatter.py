"""Read YAML front matter from content files."""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml

from common.constants import CONTENT_SUFFIX, REFERENCE_DIR

FENCE = "---"


class FrontMatterError(ValueError):
    """Front matter could not be parsed."""

    pass


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into front matter and body.

    Args:
        text: Document text

    Returns:
        Tuple of (metadata, body). Documents without front matter give an
        empty mapping and the unchanged text.

    Raises:
        FrontMatterError: If the front matter is not a valid YAML mapping
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        return {}, text

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == FENCE:
            break
    else:
        raise FrontMatterError("Unterminated front matter")

    try:
        meta = yaml.safe_load("".join(lines[1:end])) or {}
    except yaml.YAMLError as e:
        raise FrontMatterError(str(e)) from e

    if not isinstance(meta, dict):
        raise FrontMatterError("Front matter is not a mapping")

    return meta, "".join(lines[end + 1 :])


def scan_front_matter(
    root: Path,
    suffix: str = CONTENT_SUFFIX,
    exclude: str = f"/{REFERENCE_DIR}/",
) -> Iterator[tuple[Path, dict[str, Any]]]:
    """Yield the front matter of every matching file under a directory.

    Generated reference pages are skipped so a scan never reads its own
    output.

    Args:
        root: Directory to scan
        suffix: File suffix to match
        exclude: Files whose path contains this string are skipped

    Yields:
        Tuples of (path, metadata) in path order
    """
    if not root.is_dir():
        return

    for path in sorted(root.rglob(f"*{suffix}")):
        if not path.is_file() or exclude in "/" + path.relative_to(root).as_posix():
            continue
        meta, _ = parse_front_matter(path.read_text(encoding="utf-8"))
        if meta:
            yield path, meta
