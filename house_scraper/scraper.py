"""High-level orchestration of a single scrape run."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import requests

from .config import ScrapeConfig
from .extract import extract_links, extract_metadata
from .fetcher import build_session, fetch_page
from .images import download_images
from .models import ImageDownload, ScrapeResult
from .sites import resolve_site
from .storage import persist_metadata, persist_page, prepare_output_dirs, relocate_source
from .utils import is_remote

logger = logging.getLogger("house_scraper")


def run_scrape(
    source: str,
    config: ScrapeConfig,
    session: Optional[requests.Session] = None,
) -> ScrapeResult:
    """Fetch ``source``, persist the page and metadata, then download images.

    Site resolution happens before anything is written, so an unsupported
    source leaves no output behind.
    """
    overall_start = time.perf_counter()
    site = resolve_site(source, config.site)
    logger.debug("Resolved %s as %s", source, site.value)

    run_dir, images_dir = prepare_output_dirs(config.output_root, config.name)

    own_session = session is None
    session = session or build_session(config)
    try:
        page = fetch_page(source, config, session)
        page_path = persist_page(page, run_dir)
        if config.move_source and not is_remote(source):
            # Consumes and relocates the source file.
            relocate_source(Path(source), run_dir)

        links = extract_links(page.text, site)
        metadata = extract_metadata(page.text, source, len(links), site)
        metadata_path = persist_metadata(metadata, run_dir, config.metadata_format)
        logger.info("Found %d unique images.", len(links))

        downloads: List[ImageDownload] = []
        if config.skip_images:
            logger.info("--skip-images flag is set, skipping download.")
        elif links:
            logger.info("Downloading images sequentially...")
            downloads = download_images(links, images_dir, config.name, config, session)
    finally:
        if own_session:
            session.close()

    return ScrapeResult(
        run_dir=run_dir,
        page_path=page_path,
        metadata_path=metadata_path,
        metadata=metadata,
        downloads=downloads,
        total_seconds=time.perf_counter() - overall_start,
    )
