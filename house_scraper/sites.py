"""Supported sites and the fixed text patterns used to scrape them."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .errors import UnsupportedSiteError


class SiteKind(enum.Enum):
    GENERIC = "generic"
    COMPASS = "compass"
    ZILLOW = "zillow"


ADDRESS_FIELDS = ("street", "city", "state", "zip", "listing_id")


@dataclass(frozen=True)
class SitePatterns:
    """Compiled lookups for one site.

    ``address`` is a composite pattern whose named groups are
    ``ADDRESS_FIELDS``; ``price`` must define a ``price`` group.
    """

    links: re.Pattern[str]
    description: Optional[re.Pattern[str]] = None
    address: Optional[re.Pattern[str]] = None
    price: Optional[re.Pattern[str]] = None


def _address_pattern(suffix: str) -> re.Pattern[str]:
    return re.compile(
        r"<title>(?P<street>[^,<|]+), (?P<city>[^,<|]+), "
        r"(?P<state>[A-Z]{2}) (?P<zip>\d{5})"
        r" \| (?:MLS #)?(?P<listing_id>[\w-]+) \| " + suffix + r"</title>"
    )


SITE_PATTERNS: Mapping[SiteKind, SitePatterns] = MappingProxyType(
    {
        SiteKind.GENERIC: SitePatterns(
            links=re.compile(r'"(https://[^"]*?\.webp)"'),
            description=re.compile(r'<meta\s+name="description"\s+content="([^"]*)"'),
        ),
        SiteKind.COMPASS: SitePatterns(
            links=re.compile(r'"(https://[^"]*?origin\.webp)"'),
            description=re.compile(
                r'<span>Description</span>.*?<div class="[^"]*">(.*?)</div>', re.DOTALL
            ),
            address=_address_pattern("Compass"),
            price=re.compile(
                r'data-tn="listing-page-summary-price"[^>]*>\s*\$(?P<price>\d[\d,]*)'
            ),
        ),
        SiteKind.ZILLOW: SitePatterns(
            links=re.compile(
                r"(https://photos\.zillowstatic\.com/fp/[0-9a-f]+-cc_ft_\d+\.(?:jpg|webp))"
            ),
            description=re.compile(
                r'<div[^>]*data-testid="description"[^>]*>(.*?)</div>', re.DOTALL
            ),
            address=_address_pattern("Zillow"),
            price=re.compile(r'<span[^>]*data-testid="price"[^>]*>\s*\$(?P<price>\d[\d,]*)'),
        ),
    }
)

# Checked in order against the source URL or path.
SITE_MARKERS = (
    ("compass", SiteKind.COMPASS),
    ("zillow", SiteKind.ZILLOW),
)


def resolve_site(source: str, override: Optional[str] = None) -> SiteKind:
    """Identify which patterns apply to ``source``.

    An explicit ``override`` wins; otherwise the first marker found in the
    source string decides. Sources without a marker are rejected.
    """
    if override:
        try:
            return SiteKind(override.lower())
        except ValueError as exc:
            raise UnsupportedSiteError(f"Unknown site override: {override!r}") from exc

    for marker, kind in SITE_MARKERS:
        if marker in source:
            return kind
    raise UnsupportedSiteError(
        f"No extraction patterns for {source} (expected one of: "
        + ", ".join(marker for marker, _ in SITE_MARKERS)
        + ")"
    )


def patterns_for(site: SiteKind) -> SitePatterns:
    return SITE_PATTERNS[site]
