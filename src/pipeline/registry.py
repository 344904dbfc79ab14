"""Named generator dispatch table."""

from books.models import Book
from common.logger import get_logger

from .exceptions import DuplicateGeneratorError
from .handler import BuildContext, Handler, HandlerChain, handler_of

logger = get_logger(__name__)


class GeneratorRegistry:
    """Maps generator names to handler chains.

    Built once at startup and passed to the orchestrator. The set of names is
    open: books may list generators that this deployment does not provide.

    Example:
        >>> registry = GeneratorRegistry()
        >>> registry.register("opcodes", extract, write_index)
        >>> registry.dispatch(ctx, book, "opcodes")
    """

    def __init__(self):
        self._generators: dict[str, HandlerChain] = {}

    def register(self, name: str, *handlers: Handler) -> "GeneratorRegistry":
        """Bind a name to the chain of the given handlers.

        Raises:
            DuplicateGeneratorError: If the name is already registered
            ValueError: If no handlers are given
        """
        if name in self._generators:
            raise DuplicateGeneratorError(name)
        if not handlers:
            raise ValueError(f"No handlers defined for generator {name}")

        self._generators[name] = handler_of(*handlers)
        return self

    def __contains__(self, name: str) -> bool:
        return name in self._generators

    def names(self) -> list[str]:
        """Registered generator names, sorted."""
        return sorted(self._generators)

    def dispatch(self, ctx: BuildContext, book: Book, name: str) -> bool:
        """Run the named generator against a book.

        An unknown name is logged and ignored so that a configuration can
        list generators from a wider deployment. Exceptions raised by the
        generator propagate unchanged.

        Returns:
            True if a generator ran, False if the name was not registered
        """
        chain = self._generators.get(name)
        if chain is None:
            logger.warning(f"book {book.id} generator {name} is not registered")
            return False

        chain(ctx, book)
        return True
