"""
Palette Finder command line.

Usage:
    palette-finder /your/image/files/path/
    or
    palette-finder
"""
import sys
from typing import List, Optional

from palette_finder.config import config
from palette_finder.services.display import get_viewer
from palette_finder.services.pipeline import run
from palette_finder.settings import load_settings, with_path
from palette_finder.utils.logging import get_logger


def main(argv: Optional[List[str]] = None) -> int:
    """Load settings, apply the optional path argument and run the batch."""
    if argv is None:
        argv = sys.argv[1:]

    logger = get_logger()
    settings = load_settings(config.SETTINGS_FILE)

    if argv:
        logger.info(f"Source path overridden: {argv[0]}")
        settings = with_path(settings, argv[0])

    return run(settings, get_viewer())


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
