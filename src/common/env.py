"""Environment configuration for the documentation build tools.

All environment variable access goes through ``Environment`` so that the
defaults live in one place.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def books_config() -> Path:
        """Get the path of the YAML book configuration.

        Returns:
            Path to the book configuration, defaults to ./config/books.yaml
        """
        return Path(os.getenv("BOOKS_CONFIG", "./config/books.yaml"))

    @staticmethod
    def content_dir() -> Path:
        """Get the root of the per-book content directories.

        Returns:
            Content root, defaults to ./content
        """
        return Path(os.getenv("CONTENT_DIR", "./content"))

    @staticmethod
    def static_dir() -> Path:
        """Get the root that downloadable artefacts are written under.

        Returns:
            Static root, defaults to ./static
        """
        return Path(os.getenv("STATIC_DIR", "./static"))

    @staticmethod
    def site_url() -> str:
        """Get the base URL of the locally served site.

        Returns:
            Site URL, defaults to 'http://localhost:1313/'
        """
        return os.getenv("SITE_URL", "http://localhost:1313/")

    @staticmethod
    def pdf_render_url() -> str:
        """Get the endpoint of the PDF render service.

        Returns:
            Render endpoint, defaults to 'http://localhost:3000/render'
        """
        return os.getenv("PDF_RENDER_URL", "http://localhost:3000/render")

    @staticmethod
    def pdf_render_timeout() -> int:
        """Get the render request timeout in seconds.

        Returns:
            Timeout, defaults to 120
        """
        return int(os.getenv("PDF_RENDER_TIMEOUT", "120"))

    @staticmethod
    def disable_pdf() -> bool:
        """Check whether PDF generation is switched off globally.

        Returns:
            True when DISABLE_PDF is set to a truthy value, defaults to False
        """
        return os.getenv("DISABLE_PDF", "false").strip().lower() in _TRUE_VALUES


# Singleton instance for convenient access
env = Environment()
