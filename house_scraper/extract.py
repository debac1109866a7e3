"""Pattern-based extraction of image links and listing metadata."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .models import ListingMetadata
from .sites import ADDRESS_FIELDS, SiteKind, patterns_for
from .utils import collapse_whitespace, html_to_text, strip_thousands_separators

logger = logging.getLogger("house_scraper")


def extract_links(page_text: str, site: SiteKind, dedupe: bool = True) -> List[str]:
    """Return the image URLs matched by the site's link pattern.

    With ``dedupe`` the result holds each URL once; otherwise every match is
    returned in page order and duplicates are left to the download loop.
    """
    matches = patterns_for(site).links.findall(page_text)
    if not dedupe:
        return list(matches)
    return list(dict.fromkeys(matches))


def _extract_description(page_text: str, site: SiteKind) -> Optional[str]:
    pattern = patterns_for(site).description
    if pattern is None:
        return None
    match = pattern.search(page_text)
    if not match:
        logger.debug("No description block found")
        return None
    return html_to_text(match.group(1))


def _extract_address(page_text: str, site: SiteKind) -> Dict[str, Optional[str]]:
    empty: Dict[str, Optional[str]] = {key: None for key in ADDRESS_FIELDS}
    pattern = patterns_for(site).address
    if pattern is None:
        return empty
    match = pattern.search(page_text)
    if not match:
        logger.debug("No address block found")
        return empty

    values = {key: collapse_whitespace(match.group(key) or "") for key in ADDRESS_FIELDS}
    if not all(values.values()):
        logger.debug("Discarding partial address match: %s", values)
        return empty
    return dict(values)


def _extract_price(page_text: str, site: SiteKind) -> Optional[str]:
    pattern = patterns_for(site).price
    if pattern is None:
        return None
    match = pattern.search(page_text)
    if not match:
        logger.debug("No price found")
        return None
    return strip_thousands_separators(match.group("price"))


def extract_metadata(
    page_text: str,
    source_url: str,
    image_count: int,
    site: SiteKind,
) -> ListingMetadata:
    """Run every metadata lookup independently and collect the results."""
    address = _extract_address(page_text, site)
    return ListingMetadata(
        source_url=source_url,
        image_count=image_count,
        description=_extract_description(page_text, site),
        street=address["street"],
        city=address["city"],
        state=address["state"],
        zip_code=address["zip"],
        listing_id=address["listing_id"],
        price=_extract_price(page_text, site),
    )
