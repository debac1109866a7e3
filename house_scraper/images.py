"""Sequential image download loop with resume and rate limiting."""

from __future__ import annotations

import glob
import logging
import random
import time
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Set
from urllib.parse import urlparse

import filetype
import requests

from .config import ScrapeConfig
from .errors import ImageDownloadError
from .models import ImageDownload
from .storage import persist_image

logger = logging.getLogger("house_scraper")

IMAGE_EXTENSIONS = frozenset({"avif", "bmp", "gif", "jpg", "png", "tiff", "webp"})
_EXTENSION_ALIASES = {"jpeg": "jpg", "tif": "tiff"}


def _normalize_extension(ext: str) -> Optional[str]:
    ext = ext.lower()
    ext = _EXTENSION_ALIASES.get(ext, ext)
    return ext if ext in IMAGE_EXTENSIONS else None


def sniff_extension(data: bytes) -> Optional[str]:
    """File extension for an image payload, or None if it is not an image."""
    kind = filetype.guess(data)
    if kind is None or not kind.mime.startswith("image/"):
        return None
    return _normalize_extension(kind.extension)


def extension_from_url(url: str) -> Optional[str]:
    """Return the image extension named by the URL path, if any."""
    suffix = PurePosixPath(urlparse(url).path).suffix.lstrip(".")
    return _normalize_extension(suffix) if suffix else None


def find_existing(images_dir: Path, stem: str) -> Optional[Path]:
    """Return a previously saved file for ``stem`` regardless of extension."""
    for candidate in sorted(images_dir.glob(glob.escape(stem) + ".*")):
        if candidate.is_file():
            return candidate
    return None


def next_delay(config: ScrapeConfig) -> float:
    """Seconds to pause before the next download attempt."""
    if config.max_delay is not None and config.max_delay > config.delay:
        return random.uniform(config.delay, config.max_delay)
    return float(config.delay)


def fetch_image(session: requests.Session, url: str, timeout: float) -> bytes:
    """Download one image, raising ImageDownloadError on any failure."""
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ImageDownloadError(url, str(exc)) from exc
    data = resp.content
    if not data:
        raise ImageDownloadError(url, "empty response")
    return data


def download_images(
    links: Iterable[str],
    images_dir: Path,
    name: str,
    config: ScrapeConfig,
    session: Optional[requests.Session] = None,
) -> List[ImageDownload]:
    """Download each distinct link in order, pausing between requests.

    The destination index advances once per distinct URL so that file names
    stay stable across re-runs. Links whose file already exists are skipped,
    and a failed link is logged without stopping the loop.
    """
    images_dir.mkdir(parents=True, exist_ok=True)
    own_session = session is None
    session = session or requests.Session()

    seen: Set[str] = set()
    results: List[ImageDownload] = []
    index = 0
    attempted = False

    try:
        for url in links:
            if url in seen:
                logger.debug("Skipping repeated link %s", url)
                continue
            seen.add(url)
            index += 1
            stem = f"{name}-{index}"

            existing = find_existing(images_dir, stem)
            if existing is not None:
                logger.info("Skipping %s: %s already exists", url, existing)
                results.append(ImageDownload(url, index, "skipped", path=existing))
                continue

            if attempted:
                delay = next_delay(config)
                logger.info("Waiting for %.1f seconds...", delay)
                time.sleep(delay)
            attempted = True

            results.append(_download_one(session, url, index, images_dir, stem, config))
    finally:
        if own_session:
            session.close()
    return results


def _download_one(
    session: requests.Session,
    url: str,
    index: int,
    images_dir: Path,
    stem: str,
    config: ScrapeConfig,
) -> ImageDownload:
    logger.info("Downloading %s...", url)
    destination: Optional[Path] = None
    try:
        data = fetch_image(session, url, config.timeout)
        detected = sniff_extension(data)
        if detected is None:
            raise ImageDownloadError(url, "response is not a recognised image")
        extension = extension_from_url(url) or detected
        destination = images_dir / f"{stem}.{extension}"
        try:
            written = persist_image(data, destination)
        except OSError as exc:
            raise ImageDownloadError(url, f"failed to write {destination}: {exc}") from exc
    except ImageDownloadError as exc:
        logger.warning("Error downloading %s: %s", url, exc.reason)
        return ImageDownload(url, index, "failed", path=destination, error=exc.reason)

    if not written:
        logger.info("Skipping %s: %s already exists", url, destination)
        return ImageDownload(url, index, "skipped", path=destination)
    logger.info(" -> Saved to %s", destination)
    return ImageDownload(url, index, "saved", path=destination)
