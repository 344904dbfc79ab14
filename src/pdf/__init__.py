"""PDF rendering of books through an external render service."""

from .builder import PdfBuilder, print_options
from .renderer import HttpRenderer, PrintOptions, Renderer, RenderError

__all__ = [
    "HttpRenderer",
    "PdfBuilder",
    "PrintOptions",
    "Renderer",
    "RenderError",
    "print_options",
]
