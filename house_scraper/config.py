"""Configuration objects and constants for the scraper."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_OUTPUT_DIR = "scraped_data"
DEFAULT_DELAY = 2
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)
METADATA_FORMATS = ("text", "json")


def default_user_agent() -> str:
    """Return the user agent, honouring the HOUSE_SCRAPER_USER_AGENT override."""
    return os.getenv("HOUSE_SCRAPER_USER_AGENT") or DEFAULT_USER_AGENT


@dataclass
class ScrapeConfig:
    """Settings that control a single scrape run."""

    output_root: Path
    name: str
    delay: float = DEFAULT_DELAY
    max_delay: Optional[float] = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = field(default_factory=default_user_agent)
    skip_images: bool = False
    metadata_format: str = "text"
    site: Optional[str] = None
    move_source: bool = False

