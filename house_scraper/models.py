"""Data models used throughout the scraper pipeline."""

from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

DownloadStatus = Literal["saved", "skipped", "failed"]


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


@dataclass(frozen=True)
class Page:
    """A fetched page or cached local file.

    ``content`` holds the bytes exactly as received; ``text`` is their decoding
    used for extraction.
    """

    source: str
    content: bytes
    text: str
    fetched_at: dt.datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ListingMetadata:
    """Best-effort metadata pulled from a listing page.

    ``None`` means the corresponding pattern did not match.
    """

    source_url: str
    image_count: int
    description: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    listing_id: Optional[str] = None
    price: Optional[str] = None

    @property
    def has_address(self) -> bool:
        return self.street is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ImageDownload:
    """Outcome of one step of the download loop."""

    url: str
    index: int
    status: DownloadStatus
    path: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class ScrapeResult:
    """Summary of a completed run."""

    run_dir: Path
    page_path: Path
    metadata_path: Path
    metadata: ListingMetadata
    downloads: List[ImageDownload]
    total_seconds: float

    def _count(self, status: DownloadStatus) -> int:
        return sum(1 for item in self.downloads if item.status == status)

    @property
    def saved(self) -> int:
        return self._count("saved")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")
