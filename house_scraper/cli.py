"""Command-line entry point for the listing scraper."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import (
    DEFAULT_DELAY,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TIMEOUT,
    METADATA_FORMATS,
    ScrapeConfig,
)
from .errors import ScraperError
from .models import ScrapeResult
from .scraper import run_scrape
from .sites import SiteKind

logger = logging.getLogger("house_scraper.cli")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be zero or greater")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape a listing page: save its HTML and metadata, then download its images.",
    )
    parser.add_argument(
        "--url",
        required=True,
        help="URL of the page to scrape, or a path to a saved HTML file",
    )
    parser.add_argument(
        "-n",
        "--name",
        required=True,
        help="Name used for the output subdirectory and image filenames",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        type=Path,
        help="Base output directory",
    )
    parser.add_argument(
        "--skip-images",
        action="store_true",
        help="Save the page and metadata without downloading images",
    )
    parser.add_argument(
        "--delay",
        type=_non_negative_int,
        default=DEFAULT_DELAY,
        help="Delay in seconds between each download",
    )
    parser.add_argument(
        "--max-delay",
        type=_non_negative_int,
        default=None,
        help="Randomize the delay between --delay and this many seconds",
    )
    parser.add_argument(
        "--site",
        choices=[kind.value for kind in SiteKind],
        default=None,
        help="Extraction patterns to use instead of guessing from the URL",
    )
    parser.add_argument(
        "--metadata-format",
        choices=METADATA_FORMATS,
        default="text",
        help="Write metadata as info.txt (text) or info.json (json)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="HTTP request timeout in seconds",
    )
    parser.add_argument(
        "--move-source",
        action="store_true",
        help="Move a local source file into the output directory (removes the original)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)
    if not args.name.strip() or args.name in (".", "..") or "/" in args.name or "\\" in args.name:
        parser.error("--name must be a plain directory name")
    if args.max_delay is not None and args.max_delay < args.delay:
        parser.error("--max-delay must not be smaller than --delay")
    return args


def _write_summary(result: ScrapeResult) -> None:
    lines = ["", "Scraping complete! ✨"]
    if result.downloads:
        lines.append(
            f"Images: {result.saved} saved, {result.skipped} skipped, {result.failed} failed"
        )
    lines.append(f"Data saved in: {result.run_dir}")
    sys.stdout.write("\n".join(lines) + "\n")
    sys.stdout.flush()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = ScrapeConfig(
        output_root=Path(args.output),
        name=args.name,
        delay=args.delay,
        max_delay=args.max_delay,
        timeout=args.timeout,
        skip_images=args.skip_images,
        metadata_format=args.metadata_format,
        site=args.site,
        move_source=args.move_source,
    )

    try:
        result = run_scrape(args.url, config)
    except ScraperError as exc:
        logger.error("%s", exc)
        return 1

    logger.debug("Finished in %.2fs", result.total_seconds)
    _write_summary(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
