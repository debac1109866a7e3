"""Write run artifacts to the output directory tree."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import List, Tuple

from .errors import MetadataWriteError, PersistenceError
from .models import ListingMetadata, Page

logger = logging.getLogger("house_scraper")

PAGE_FILENAME = "page.html"
METADATA_FILENAMES = {"text": "info.txt", "json": "info.json"}
# Files a run writes itself; a relocated source must not take these names.
_RESERVED_NAMES = frozenset({PAGE_FILENAME, *METADATA_FILENAMES.values()})

# Listing fields in the order they appear in info.txt.
_TEXT_FIELDS = (
    ("Street", "street"),
    ("City", "city"),
    ("State", "state"),
    ("Zip", "zip_code"),
    ("Listing ID", "listing_id"),
    ("Price", "price"),
)


def prepare_output_dirs(output_root: Path, name: str) -> Tuple[Path, Path]:
    """Create ``<output>/<name>/images`` and return the run and images dirs."""
    run_dir = Path(output_root) / name
    images_dir = run_dir / "images"
    try:
        images_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PersistenceError(f"Failed to create output directories {images_dir}: {exc}") from exc
    return run_dir, images_dir


def persist_page(page: Page, run_dir: Path) -> Path:
    path = run_dir / PAGE_FILENAME
    try:
        path.write_bytes(page.content)
    except OSError as exc:
        raise PersistenceError(f"Failed to save HTML file {path}: {exc}") from exc
    logger.debug("Saved page to %s", path)
    return path


def format_metadata_text(record: ListingMetadata) -> str:
    """Render the flat ``Key: value`` block written to info.txt.

    Absent fields are omitted so they can be told apart from empty values.
    """
    sections: List[str] = [f"URL: {record.source_url}"]
    if record.description is not None:
        sections.append(f"Info: {record.description}")

    field_lines = [
        f"{label}: {getattr(record, attr)}"
        for label, attr in _TEXT_FIELDS
        if getattr(record, attr) is not None
    ]
    if field_lines:
        sections.append("\n".join(field_lines))

    sections.append(f"Number of unique images found: {record.image_count}")
    return "\n\n".join(sections)


def persist_metadata(record: ListingMetadata, run_dir: Path, fmt: str = "text") -> Path:
    """Write the metadata record as info.txt or info.json."""
    try:
        filename = METADATA_FILENAMES[fmt]
    except KeyError as exc:
        raise MetadataWriteError(f"Unknown metadata format: {fmt!r}") from exc

    if fmt == "json":
        content = json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"
    else:
        content = format_metadata_text(record)

    path = run_dir / filename
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise MetadataWriteError(f"Failed to write info file {path}: {exc}") from exc
    logger.debug("Saved metadata to %s", path)
    return path


def persist_image(data: bytes, destination: Path) -> bool:
    """Write image bytes unless ``destination`` already exists.

    Returns False when an existing file was left untouched.
    """
    if destination.exists():
        return False
    destination.write_bytes(data)
    return True


def relocate_source(source: Path, run_dir: Path) -> Path:
    """Move a local source file into the run directory.

    This consumes the source: the file no longer exists at its original path.
    A source named like a run artifact is stored as ``source-<name>``, and an
    existing file at the destination is never replaced.
    """
    source = Path(source)
    target = run_dir / source.name
    if target.exists() and target.resolve() == source.resolve():
        return target
    if source.name in _RESERVED_NAMES:
        target = run_dir / f"source-{source.name}"
    if target.exists():
        raise PersistenceError(f"Refusing to move {source}: {target} already exists")
    try:
        shutil.move(str(source), str(target))
    except OSError as exc:
        raise PersistenceError(f"Failed to move {source} into {run_dir}: {exc}") from exc
    logger.info("Moved source file %s to %s", source, target)
    return target
