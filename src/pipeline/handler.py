"""Composable units of work over a single book.

A handler is any callable taking ``(ctx, book)``. It signals failure by
raising; returning normally is success. ``HandlerChain`` adds sequential
composition on top of that:

    >>> chain = handler_of(extract, write_index, write_table)
    >>> chain(ctx, book)   # write_index never runs if extract raises
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from books.models import Book

from .task_queue import PriorityTaskQueue


@dataclass
class BuildContext:
    """State shared by every handler during one generation run."""

    tasks: PriorityTaskQueue = field(default_factory=PriorityTaskQueue)


Handler = Callable[[BuildContext, Book], None]


class OnceFlag:
    """Caller-owned marker recording that a run_once chain has fired.

    One flag guards one piece of work. Reusing a flag across books means
    only the first book gets the work done.
    """

    def __init__(self):
        self.done = False

    def __bool__(self) -> bool:
        return self.done


class HandlerChain:
    """A handler that can be chained with others."""

    def __init__(self, func: Handler | None = None):
        self._func = func

    def __call__(self, ctx: BuildContext, book: Book) -> None:
        if self._func is not None:
            self._func(ctx, book)

    def then(self, next_handler: Handler) -> "HandlerChain":
        """Chain another handler to run after this one succeeds.

        If this chain raises, next_handler never runs and the exception
        propagates unchanged. Work already done is not undone.
        """

        def chained(ctx: BuildContext, book: Book) -> None:
            self(ctx, book)
            next_handler(ctx, book)

        return HandlerChain(chained)

    def run_once(self, flag: OnceFlag) -> "HandlerChain":
        """Wrap this chain so it only runs while flag is unset."""
        return run_once(flag, self)


def run_once(flag: OnceFlag, handler: Handler) -> HandlerChain:
    """Run a handler the first time the chain is called, then never again.

    The flag is set before the handler runs.
    """

    def once(ctx: BuildContext, book: Book) -> None:
        if flag.done:
            return
        flag.done = True
        handler(ctx, book)

    return HandlerChain(once)


def handler_of(*handlers: Handler) -> HandlerChain:
    """Compose handlers into one chain, run left to right.

    No handlers gives a chain that does nothing.
    """
    if not handlers:
        return HandlerChain()

    first = handlers[0]
    chain = first if isinstance(first, HandlerChain) else HandlerChain(first)
    for handler in handlers[1:]:
        chain = chain.then(handler)
    return chain
