"""Utility modules for Pisadas.

Provides:
- text: escape_html, strip_tags for HTML output
- logger: get_logger for logging
"""

from pisadas.utils.logger import get_logger
from pisadas.utils.text import escape_html, strip_tags

__all__ = [
    "escape_html",
    "get_logger",
    "strip_tags",
]
