"""Logging setup shared by the CLI commands and the server."""

import sys

from loguru import logger

from nft_gallery.config import resolve_log_level


def configure_logging(*, verbose: bool = False) -> None:
    """Send gallery logs to stderr.

    `--verbose` forces DEBUG; otherwise NFT_GALLERY_LOG_LEVEL (default INFO) applies.
    """
    logger.remove()
    level = "DEBUG" if verbose else resolve_log_level()
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
    logger.debug("Logging at level {}", level)
