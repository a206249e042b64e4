"""
Text helpers for turning rich text into indexable plain text.
"""

import re

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (non-breaking spaces included) into single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def strip_html(html: str) -> str:
    """
    Remove markup from a rich text value.

    Tags are replaced by spaces so adjacent blocks do not run together,
    entities are decoded, and whitespace is collapsed.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    return collapse_whitespace(soup.get_text(" "))
