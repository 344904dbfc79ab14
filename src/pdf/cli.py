#!/usr/bin/env python3
"""CLI for rendering books to PDF."""

import argparse

from books.shelf import ConfigError
from common.env import env
from common.logger import get_logger, setup_logging, success
from pipeline.cli import add_config_arguments, load_shelf

from .builder import PdfBuilder
from .renderer import HttpRenderer

logger = get_logger(__name__)


def cmd_render(args):
    """Render the print view of every selected book.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero if any book failed)
    """
    try:
        shelf = load_shelf(args)
        books = shelf.select(args.book)
    except ConfigError as e:
        logger.error(f"[red]✗[/red] {e}")
        return 1

    enabled = not (args.disable_pdf or env.disable_pdf())
    with HttpRenderer(args.render_url, timeout=env.pdf_render_timeout()) as renderer:
        builder = PdfBuilder(renderer, shelf.site_url, args.static_dir, enabled=enabled)
        failed = builder.build(books)

    if failed:
        logger.error(f"[red]✗[/red] PDF generation failed for: {', '.join(failed)}")
        return 1

    if enabled:
        success(f"Rendered {len(books)} book(s)")
    return 0


def main(argv: list[str] | None = None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Render documentation books to PDF")
    parser.add_argument(
        "--log-file", type=str, default=None, help="Also write log records to a file"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render books to PDF")
    add_config_arguments(render_parser)
    render_parser.add_argument(
        "--book",
        action="append",
        default=None,
        help="Only render this book (repeatable, default: all books)",
    )
    render_parser.add_argument(
        "-p",
        "--disable-pdf",
        action="store_true",
        help="Disable PDF generation (also: DISABLE_PDF=true)",
    )
    render_parser.add_argument(
        "--render-url",
        type=str,
        default=env.pdf_render_url(),
        help="PDF render service endpoint (default: PDF_RENDER_URL)",
    )
    render_parser.set_defaults(func=cmd_render)

    args = parser.parse_args(argv)
    setup_logging(log_file=args.log_file)
    return args.func(args)


if __name__ == "__main__":
    exit(main())
