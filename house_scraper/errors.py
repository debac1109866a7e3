"""Exception hierarchy for the scraper pipeline."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for every error raised by the pipeline."""


class FetchError(ScraperError):
    """The primary page could not be fetched or read."""


class UnsupportedSiteError(ScraperError):
    """No extraction patterns are known for the given source."""


class PersistenceError(ScraperError):
    """The raw page could not be written to the run directory."""


class MetadataWriteError(PersistenceError):
    """The metadata record could not be written."""


class ImageDownloadError(ScraperError):
    """A single image failed to download or save; never fatal to the run."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
