"""Single-page listing scraper: fetch a page, extract its images and metadata."""

__version__ = "0.1.0"
