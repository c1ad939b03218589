"""Text escaping for HTML output.

Example:
    >>> from pisadas.utils.text import escape_html
    >>> escape_html('say "a < b"')
    'say &quot;a &lt; b&quot;'
    >>> escape_html('say "a < b"', quote=False)
    'say "a &lt; b"'
"""

from __future__ import annotations

import html as html_module
import re

_HTML_TAG_PATTERN = re.compile(r"<[^>]*>")


def escape_html(text: str, *, quote: bool = True) -> str:
    """Escape HTML special characters.

    Attribute mode (``quote=True``) escapes ``&``, ``<``, ``>`` and ``"``.
    Body mode (``quote=False``) leaves double quotes alone. Single quotes
    and control characters are never touched.

    Args:
        text: Text to escape
        quote: Also escape double quotes

    Returns:
        Escaped text

    Examples:
        >>> escape_html("Tom & Jerry")
        'Tom &amp; Jerry'
        >>> escape_html("it's")
        "it's"
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=False)
    if quote:
        escaped = escaped.replace('"', "&quot;")
    return escaped


def strip_tags(text: str) -> str:
    """Remove every ``<...>`` span.

    Only meant for fragments the renderer generated itself, never for
    arbitrary untrusted HTML.

    Examples:
        >>> strip_tags("<em>hi</em> there")
        'hi there'
    """
    return _HTML_TAG_PATTERN.sub("", text)
