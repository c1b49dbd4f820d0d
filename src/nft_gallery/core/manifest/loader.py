"""Load the two collection manifests and join them into items."""

import asyncio

from loguru import logger

from nft_gallery.config import (
    COLLECTION_ERROR_MESSAGE,
    IMAGE_NAME_MARKER,
    IMAGE_NAME_PREFIX,
    IMAGE_NAME_SUFFIX,
)
from nft_gallery.errors import ContentFetchError, ManifestLoadError
from nft_gallery.models.item import Item, ManifestRow
from nft_gallery.protocols import FetcherProtocol


def _data_lines(text: str) -> list[str]:
    """Lines after the header, with blank lines dropped."""
    return [line for line in text.split("\n")[1:] if line.strip()]


def _split_row(line: str) -> ManifestRow | None:
    fields = line.split(",")
    if len(fields) < 2:
        return None
    name, url = fields[0].strip(), fields[1].strip()
    if not url:
        return None
    return ManifestRow(name=name, url=url)


def parse_manifest(text: str) -> list[ManifestRow]:
    """Parse a manifest into rows, skipping rows without a URL field."""
    rows = [_split_row(line) for line in _data_lines(text)]
    return [row for row in rows if row is not None]


def display_name(image_name: str) -> str:
    """Derive the short display name, e.g. `image_7.jpeg` -> `#7`."""
    return image_name.replace(IMAGE_NAME_SUFFIX, "", 1).replace(
        IMAGE_NAME_PREFIX, IMAGE_NAME_MARKER, 1
    )


def join_manifests(images_text: str, metadata_text: str) -> list[Item]:
    """Pair row i of the images manifest with row i of the metadata manifest.

    Pairing is positional over non-blank data lines, up to the shorter manifest.
    A pair where either side has no URL is dropped; its position still counts,
    so item ids stay aligned with manifest rows.
    """
    image_lines = _data_lines(images_text)
    metadata_lines = _data_lines(metadata_text)
    logger.debug(
        "Parsing manifests: {} image lines, {} metadata lines",
        len(image_lines),
        len(metadata_lines),
    )

    items: list[Item] = []
    for i, (image_line, metadata_line) in enumerate(zip(image_lines, metadata_lines)):
        image_row = _split_row(image_line)
        metadata_row = _split_row(metadata_line)
        if image_row is None or metadata_row is None:
            logger.debug("Skipping manifest row {}: missing URL", i)
            continue
        items.append(
            Item(
                id=i,
                name=display_name(image_row.name),
                image_url=image_row.url,
                metadata_url=metadata_row.url,
            )
        )

    if len(image_lines) != len(metadata_lines):
        logger.warning(
            "Manifest lengths differ ({} images, {} metadata); extra rows ignored",
            len(image_lines),
            len(metadata_lines),
        )
    logger.info("Parsed {} items", len(items))
    return items


async def load_items(fetcher: FetcherProtocol, images_url: str, metadata_url: str) -> list[Item]:
    """Fetch both manifests and join them.

    Raises:
        ManifestLoadError: if either manifest cannot be fetched. There is no
            partial-success mode.
    """
    logger.info("Loading manifests {!r} and {!r}", images_url, metadata_url)
    try:
        images_text, metadata_text = await asyncio.gather(
            fetcher.fetch_text(images_url),
            fetcher.fetch_text(metadata_url),
        )
    except ContentFetchError as exc:
        logger.error("Error loading manifests: {}", exc)
        raise ManifestLoadError(COLLECTION_ERROR_MESSAGE) from exc

    logger.debug(
        "Manifests loaded: images {} chars, metadata {} chars",
        len(images_text),
        len(metadata_text),
    )
    return join_manifests(images_text, metadata_text)
