"""Generation pipeline: handler chains, generator dispatch and deferred tasks.

Example:
    >>> from pipeline import GeneratorRegistry, GenerationOrchestrator
    >>>
    >>> registry = GeneratorRegistry()
    >>> registry.register("opcodes", extract, write_index)
    >>> GenerationOrchestrator(registry).run(shelf.books)
"""

from .exceptions import DuplicateGeneratorError, GeneratorError, PipelineError
from .guard import ExtractionGuard
from .handler import BuildContext, HandlerChain, OnceFlag, handler_of, run_once
from .orchestrator import GenerationOrchestrator, RunSummary, write_book_export
from .registry import GeneratorRegistry
from .task_queue import DEFAULT_PRIORITY, PriorityTaskQueue

__all__ = [
    # Composition
    "BuildContext",
    "HandlerChain",
    "OnceFlag",
    "handler_of",
    "run_once",
    # Dispatch and orchestration
    "GeneratorRegistry",
    "GenerationOrchestrator",
    "RunSummary",
    "write_book_export",
    # Deferred work
    "DEFAULT_PRIORITY",
    "PriorityTaskQueue",
    "ExtractionGuard",
    # Exceptions
    "PipelineError",
    "DuplicateGeneratorError",
    "GeneratorError",
]
