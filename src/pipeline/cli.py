#!/usr/bin/env python3
"""CLI for the generation pipeline."""

import argparse
from pathlib import Path

from books.shelf import BookShelf, ConfigError, load_bookshelf
from common.env import env
from common.logger import get_logger, setup_logging, success
from reference import register_reference_generators

from .exceptions import PipelineError
from .orchestrator import GenerationOrchestrator
from .registry import GeneratorRegistry

logger = get_logger(__name__)


def build_registry() -> GeneratorRegistry:
    """Registry holding every generator shipped with the tools."""
    return register_reference_generators(GeneratorRegistry())


def load_shelf(args) -> BookShelf:
    return load_bookshelf(
        args.config,
        content_root=args.content_dir,
        static_root=args.static_dir,
        site_url=env.site_url(),
    )


def cmd_run(args):
    """Run the generators of every selected book.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        shelf = load_shelf(args)
        books = shelf.select(args.book)
    except ConfigError as e:
        logger.error(f"[red]✗[/red] {e}")
        return 1

    orchestrator = GenerationOrchestrator(build_registry())
    try:
        summary = orchestrator.run(books)
    except (PipelineError, OSError) as e:
        logger.error(f"[red]✗[/red] Generation failed: {e}")
        return 1

    success(
        f"Generated {summary.books} book(s): "
        f"{summary.generators} generator run(s), {summary.tasks} deferred task(s)"
    )
    return 0


def cmd_list(args):
    """List registered generators and what each configured book asks for."""
    registry = build_registry()
    logger.info("Registered generators:")
    for name in registry.names():
        logger.info(f"  {name}")

    try:
        shelf = load_shelf(args)
    except ConfigError as e:
        logger.error(f"[red]✗[/red] {e}")
        return 1

    logger.info("\nBooks:")
    for book in shelf.books:
        names = [
            name if name in registry else f"{name} [yellow](missing)[/yellow]"
            for name in book.generate
        ]
        logger.info(f"  {book.id}: {', '.join(names) or '-'}")
    return 0


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command that reads the book configuration."""
    parser.add_argument(
        "--config",
        type=Path,
        default=env.books_config(),
        help="Book configuration file (default: BOOKS_CONFIG or ./config/books.yaml)",
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=env.content_dir(),
        help="Root of the book content directories (default: CONTENT_DIR or ./content)",
    )
    parser.add_argument(
        "--static-dir",
        type=Path,
        default=env.static_dir(),
        help="Root for generated downloads (default: STATIC_DIR or ./static)",
    )


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Generate reference content for documentation books"
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Also write log records to a file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run the configured generators")
    add_config_arguments(run_parser)
    run_parser.add_argument(
        "--book",
        action="append",
        default=None,
        help="Only generate this book (repeatable, default: all books)",
    )
    run_parser.set_defaults(func=cmd_run)

    list_parser = subparsers.add_parser("list", help="List generators and book configuration")
    add_config_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)
    setup_logging(log_file=args.log_file)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
