"""Retrieve page content over HTTP or from a cached local file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from .config import ScrapeConfig
from .errors import FetchError
from .models import Page
from .utils import is_remote

logger = logging.getLogger("house_scraper")

DEFAULT_ENCODING = "utf-8"


def _decode_response(resp: requests.Response, content: bytes) -> str:
    """Decode a page body for extraction.

    The charset named in Content-Type wins; otherwise the body is UTF-8,
    rather than the ISO-8859-1 fallback requests applies to text/* types.
    """
    content_type = resp.headers.get("Content-Type", "")
    encoding = resp.encoding if "charset" in content_type.lower() else None
    try:
        return content.decode(encoding or DEFAULT_ENCODING, errors="replace")
    except LookupError:
        logger.warning("Unknown charset %r, decoding as %s", encoding, DEFAULT_ENCODING)
        return content.decode(DEFAULT_ENCODING, errors="replace")


def build_session(config: ScrapeConfig) -> requests.Session:
    """Create the HTTP session shared by the page fetch and image downloads."""
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


def fetch_page(
    source: str,
    config: ScrapeConfig,
    session: Optional[requests.Session] = None,
) -> Page:
    """Fetch ``source`` from the network or read it from disk."""
    if is_remote(source):
        session = session or build_session(config)
        logger.info("Fetching HTML from %s...", source)
        try:
            resp = session.get(source, timeout=config.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Failed to fetch {source}: {exc}") from exc
        content = resp.content
        return Page(source=source, content=content, text=_decode_response(resp, content))

    path = Path(source).expanduser()
    logger.info("Reading HTML from %s...", path)
    try:
        content = path.read_bytes()
        text = content.decode(DEFAULT_ENCODING)
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(f"Failed to read HTML from file {path}: {exc}") from exc
    return Page(source=source, content=content, text=text)
