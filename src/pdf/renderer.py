"""Clients for the service that prints a web page to PDF.

The browser itself runs inside the render service; these tools only send it
a URL plus page layout and get PDF bytes back.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any

import requests

from common.logger import get_logger

logger = get_logger(__name__)


class RenderError(Exception):
    """The page could not be rendered to PDF."""

    pass


@dataclass
class PrintOptions:
    """Page layout sent with a render request.

    Margins and paper size are in inches. Header and footer templates are
    sent already expanded.
    """

    margin_top: float
    margin_bottom: float
    margin_left: float
    margin_right: float
    landscape: bool
    paper_width: float
    paper_height: float
    print_background: bool
    display_header_footer: bool
    header_template: str = ""
    footer_template: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Renderer(ABC):
    """Base class for PDF renderers."""

    @abstractmethod
    def render(self, url: str, options: PrintOptions) -> bytes:
        """Print a page to PDF.

        Args:
            url: Page to navigate to
            options: Page layout

        Returns:
            PDF document bytes

        Raises:
            RenderError: If the page could not be rendered
        """
        pass

    def close(self) -> None:
        """Release any resources held by the renderer."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class HttpRenderer(Renderer):
    """Renderer backed by an HTTP render service.

    The service accepts ``POST {"url": ..., "options": {...}}`` as JSON and
    answers with the PDF document.
    """

    def __init__(self, endpoint: str, timeout: int = 120, session: requests.Session | None = None):
        """Initialize the renderer.

        Args:
            endpoint: Render service URL
            timeout: Request timeout in seconds
            session: HTTP session to use (a new one if None)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/pdf"})

    def render(self, url: str, options: PrintOptions) -> bytes:
        logger.debug(f"Rendering {url} via {self.endpoint}")
        try:
            response = self.session.post(
                self.endpoint,
                json={"url": url, "options": options.to_dict()},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise RenderError(f"Render service timed out for {url}") from e
        except requests.exceptions.RequestException as e:
            raise RenderError(f"Render service error for {url}: {e}") from e

        if not response.content:
            raise RenderError(f"Render service returned an empty document for {url}")

        return response.content

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
