"""Utility helpers for text normalization and source handling."""

from __future__ import annotations

import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

WHITESPACE_PATTERN = re.compile(r"\s+")
REMOTE_SCHEMES = {"http", "https"}


def is_remote(source: str) -> bool:
    """Return True when ``source`` is an HTTP(S) locator rather than a path."""
    return urlparse(source).scheme.lower() in REMOTE_SCHEMES


def collapse_whitespace(value: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", value).strip()


def html_to_text(fragment: str) -> str:
    """Reduce an HTML fragment to a single line of readable text."""
    soup = BeautifulSoup(fragment, "html.parser")
    return collapse_whitespace(soup.get_text(" "))


def strip_thousands_separators(value: str) -> str:
    return value.replace(",", "").strip()
