"""Operating system API reference generator.

Pages list the API calls they document under an ``api`` front matter key,
each with a name, a hex address and a title. The generator writes two index
pages whose front matter carries the collected entries, one sorted by
address and one by name; the site theme renders the tables.
"""

from dataclasses import dataclass, field
from typing import Any

from books.models import Book
from common.logger import get_logger
from pipeline.exceptions import GeneratorError
from pipeline.guard import ExtractionGuard
from pipeline.handler import BuildContext
from pipeline.registry import GeneratorRegistry
from writers.files import write_file
from writers.pages import reference_filename, reference_page

from .frontmatter import FrontMatterError, scan_front_matter

logger = get_logger(__name__)


@dataclass
class ApiEntry:
    """One documented API call."""

    name: str
    addr: str
    title: str = ""
    call: int = 0
    params: dict[str, Any] = field(default_factory=dict)


def api_entries(meta: dict[str, Any]) -> list[ApiEntry]:
    """Parse the api entries declared by one page."""
    entries = []
    for item in meta.get("api") or []:
        if not isinstance(item, dict):
            continue
        entry = ApiEntry(
            name=str(item.get("name") or ""),
            addr=str(item.get("addr") or ""),
            title=str(item.get("title") or ""),
            params=item,
        )
        try:
            entry.call = int(entry.addr, 16)
        except ValueError:
            logger.warning(f"Failed to parse addr \"{entry.addr}\" for {entry.name}")
        entries.append(entry)
    return entries


class ApiIndexGenerator:
    """Generator producing API indices for a book."""

    def __init__(self, name: str = "api"):
        self.name = name
        self.extracted = ExtractionGuard(name)
        self.entries: dict[str, list[ApiEntry]] = {}

    def extract(self, ctx: BuildContext, book: Book) -> None:
        """Collect the book's API entries, once per book."""
        if not self.extracted.claim(book.id):
            return

        logger.info(f"Scanning API calls for book {book.id}")
        entries = self.entries.setdefault(book.id, [])
        try:
            for _path, meta in scan_front_matter(book.content_path):
                entries.extend(api_entries(meta))
        except FrontMatterError as e:
            raise GeneratorError(book.id, f"bad front matter: {e}") from e

    def write_address_index(self, ctx: BuildContext, book: Book) -> None:
        entries = sorted(self.entries.get(book.id, []), key=lambda e: e.call)
        self._write(book, entries, "api", "API by address")

    def write_name_index(self, ctx: BuildContext, book: Book) -> None:
        entries = sorted(self.entries.get(book.id, []), key=lambda e: e.name.lower())
        self._write(book, entries, "apiName", "API by name")

    def _write(self, book: Book, entries: list[ApiEntry], name: str, title: str) -> None:
        page = reference_page(
            title,
            title,
            extra={"nometa": True, "api": [e.params for e in entries]},
        )
        write_file(reference_filename(book.content_path, name), page, book.modified)

    def register(self, registry: GeneratorRegistry) -> GeneratorRegistry:
        return registry.register(
            self.name,
            self.extract,
            self.write_address_index,
            self.write_name_index,
        )
