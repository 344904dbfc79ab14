"""Shared constants for the documentation build tools.

For environment-based configuration (paths, service URLs), use the env module:
    from common.env import env
    site = env.site_url()
"""

# Deferred task priorities. Lower values run first; only the relative order
# matters.
INDEX_PRIORITY = 25
EXPORT_PRIORITY = 100

# Generated reference pages live under <content>/<book>/reference/
REFERENCE_DIR = "reference"

# Filenames inside a book's static directory
EXPORT_DIR = "reference"
PDF_SUFFIX = ".pdf"

# Content files scanned for front matter
CONTENT_SUFFIX = ".html"
