"""Rich-backed logging for the documentation build tools.

Every module asks for its logger through ``get_logger(__name__)``; CLI entry
points call ``setup_logging()`` once so that third-party loggers share the
same console.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Scanning opcodes")
    logger.warning("book 6502 generator foo is not registered")
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Shared console so progress lines and log records interleave correctly
console = Console()


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a logger that writes through rich.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level name. If None, LOG_LEVEL from the environment
               is used, falling back to INFO.
        show_time: Show timestamp in log output
        show_path: Show source location in log output

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Already configured by an earlier call
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # pytest's caplog hooks the root logger
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the root logger for a CLI run.

    Args:
        level: Default level, overridden by LOG_LEVEL when set
        log_file: Optional path that also receives every record
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler())

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)


def progress(message: str) -> None:
    """Print a progress line without any logger prefix."""
    console.print(message)


def success(message: str) -> None:
    """Print a success line with a green checkmark.

    Example:
        >>> success("Generated 3 book(s)")
        ✓ Generated 3 book(s)
    """
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning line with a yellow marker."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error line to stderr with a red cross."""
    console.print(f"[red]✗[/red] {message}", file=sys.stderr)
