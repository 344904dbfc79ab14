"""Instruction set reference generator.

Instruction pages carry their opcodes in front matter::

    ---
    title: ADC
    op: ADC
    opcodes:
      - code: "69"
        addressing: "#"
        bytes: 2
        cycles: 2
    ---

The generator scans a book once, then writes index pages sorted by opcode
and by instruction name, a CSV per index, and adds each index as a sheet of
the book's spreadsheet export.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from books.models import Book
from common.constants import INDEX_PRIORITY
from common.logger import get_logger
from pipeline.exceptions import GeneratorError
from pipeline.guard import ExtractionGuard
from pipeline.handler import BuildContext, Handler
from pipeline.registry import GeneratorRegistry
from writers.files import write_file
from writers.pages import Paginator, html_table, paginate_by, reference_filename, reference_page
from writers.tables import Table, write_csv

from .frontmatter import FrontMatterError, scan_front_matter

logger = get_logger(__name__)

COLUMNS = ["Decimal", "Hex", "Instruction", "Addressing", "Len(byte)", "Cycles"]


def opcode_value(code: str) -> int | None:
    """Numeric value of a hex opcode, ignoring operand placeholders."""
    try:
        return int(code.replace("nn", ""), 16)
    except ValueError:
        return None


@dataclass
class Opcode:
    """One encoding of an instruction."""

    code: str
    op: str
    addressing: str = ""
    bytes: Any = ""
    cycles: Any = ""
    order: int = 0

    def row(self) -> list[Any]:
        return [self.order, self.code, self.op, self.addressing, self.bytes, self.cycles]


@dataclass
class InstructionSet:
    """Opcodes collected for one book."""

    opcodes: list[Opcode] = field(default_factory=list)

    def extract_front_matter(self, meta: dict[str, Any]) -> int:
        """Collect the opcodes declared by one page.

        Returns:
            Number of opcodes found
        """
        op = str(meta.get("op") or meta.get("title") or "")
        count = 0
        for entry in meta.get("opcodes") or []:
            if not isinstance(entry, dict) or entry.get("code") is None:
                continue
            self.opcodes.append(
                Opcode(
                    code=str(entry["code"]).upper().replace("NN", "nn"),
                    op=str(entry.get("op") or op),
                    addressing=str(entry.get("addressing") or ""),
                    bytes=entry.get("bytes", ""),
                    cycles=entry.get("cycles", ""),
                )
            )
            count += 1
        return count

    def normalise(self) -> None:
        """Drop duplicate codes and number each opcode by its value."""
        unique: dict[str, Opcode] = {}
        for opcode in self.opcodes:
            if opcode.code in unique:
                logger.debug(f"Duplicate opcode {opcode.code} for {opcode.op}, keeping first")
                continue
            value = opcode_value(opcode.code)
            if value is None:
                logger.warning(f"Failed to parse opcode \"{opcode.code}\" for {opcode.op}")
                value = 0
            opcode.order = value
            unique[opcode.code] = opcode
        self.opcodes = list(unique.values())

    def by_code(self) -> list[Opcode]:
        return sorted(self.opcodes, key=lambda o: (o.order, o.code))

    def by_name(self) -> list[Opcode]:
        return sorted(self.opcodes, key=lambda o: (o.op, o.addressing))


class InstructionGenerator:
    """Generator producing instruction indices for a book."""

    def __init__(self, name: str = "opcodes"):
        self.name = name
        self.extracted = ExtractionGuard(name)
        self.sets: dict[str, InstructionSet] = {}

    def instructions(self, book: Book) -> InstructionSet:
        """Get the instruction set for a book, creating it if needed."""
        return self.sets.setdefault(book.id, InstructionSet())

    def extract(self, ctx: BuildContext, book: Book) -> None:
        """Scan the book's content for opcodes, once per book."""
        instructions = self.instructions(book)

        if not self.extracted.claim(book.id):
            return

        logger.info(f"Scanning opcodes for book {book.id}")
        try:
            for _path, meta in scan_front_matter(book.content_path):
                instructions.extract_front_matter(meta)
        except FrontMatterError as e:
            raise GeneratorError(book.id, f"bad front matter: {e}") from e

        instructions.normalise()
        logger.debug(f"book {book.id}: {len(instructions.opcodes)} opcode(s)")

    def delayed(self, writer: Callable[[Book], None]) -> Handler:
        """Handler that defers a writer until every book has been extracted.

        The book's spreadsheet export is attached immediately so the export
        finishing task is scheduled for it.
        """

        def schedule(ctx: BuildContext, book: Book) -> None:
            book.get_export()
            ctx.tasks.add_priority(INDEX_PRIORITY, partial(writer, book))

        return schedule

    def write_opcode_index(self, book: Book) -> None:
        self._write(
            book,
            self.instructions(book).by_code(),
            "opcodes",
            "Instruction List by opcode",
            "Instructions by hex opcode",
            # One table per block of 16 opcodes
            paginate_by(lambda row: row[0] // 16),
        )

    def write_name_index(self, book: Book) -> None:
        self._write(
            book,
            self.instructions(book).by_name(),
            "instructions",
            "Instruction List by name",
            "Instructions by name",
            paginate_by(lambda row: str(row[2])[:1]),
        )

    def _write(
        self,
        book: Book,
        opcodes: list[Opcode],
        name: str,
        title: str,
        desc: str,
        paginator: Paginator,
    ) -> None:
        rows = [o.row() for o in opcodes]

        page = reference_page(title, desc, html_table("opIndex", COLUMNS, rows, paginator))
        write_file(reference_filename(book.content_path, name), page, book.modified)

        table = Table(title=name, columns=list(COLUMNS), rows=rows)
        write_csv(table, book.static_path(f"{name}.csv"), book.modified)
        book.get_export().add_sheet(table)

    def register(self, registry: GeneratorRegistry) -> GeneratorRegistry:
        return registry.register(
            self.name,
            self.extract,
            self.delayed(self.write_opcode_index),
            self.delayed(self.write_name_index),
        )
