"""Exceptions raised by the generation pipeline."""


class PipelineError(Exception):
    """Base exception for pipeline errors."""

    pass


class DuplicateGeneratorError(PipelineError):
    """A generator name was registered twice.

    Raised at startup and never handled by the pipeline: it means the
    generator wiring is broken, not that a build failed.
    """

    def __init__(self, name: str):
        super().__init__(f"Generator {name} already registered")
        self.name = name


class GeneratorError(PipelineError):
    """A generator could not complete its work for a book."""

    def __init__(self, book_id: str, message: str):
        super().__init__(f"book {book_id}: {message}")
        self.book_id = book_id
