"""Configuration constants for nft-gallery."""

import os
from pathlib import Path

# Pagination and filtering.
ITEMS_PER_PAGE: int = 50
RANDOM_SAMPLE_SIZE: int = 100

# Background indexing: only a prefix of the collection is prefetched.
INDEX_LIMIT: int = 200
INDEX_START_DELAY: float = 2.0
INDEX_PACE_INTERVAL: float = 0.1

# Quiet period before a search keystroke is applied.
SEARCH_DEBOUNCE: float = 0.3

# Manifest locations, relative to the gallery base (or local paths).
IMAGES_MANIFEST: str = "data-images.csv"
METADATA_MANIFEST: str = "data-metadata.csv"

# Display name derivation from the images manifest.
IMAGE_NAME_SUFFIX: str = ".jpeg"
IMAGE_NAME_PREFIX: str = "image_"
IMAGE_NAME_MARKER: str = "#"

# Metadata traits consumed by the overlay, and their fallbacks.
LORE_POEM_TRAIT: str = "Lore Poem"
EMOJI_SONG_TRAIT: str = "Emoji Song"
LORE_POEM_PLACEHOLDER: str = "No lore poem available for this Midnight Ape."
EMOJI_SONG_PLACEHOLDER: str = "🌑🦧✨"

GALLERY_ITEM_TITLE: str = "Midnight Ape"

# User-facing messages.
COLLECTION_ERROR_MESSAGE: str = "Failed to load collection data. CSV files may be missing."
OVERLAY_ERROR_MESSAGE: str = "Failed to load data."

# Server.
DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 3001
REQUEST_TIMEOUT: float = 30.0


def resolve_port() -> int:
    """Listen port, from NFT_GALLERY_PORT if set."""
    value = os.environ.get("NFT_GALLERY_PORT")
    return int(value) if value else DEFAULT_PORT


def resolve_static_dir() -> Path:
    """Directory served as the front-end bundle. Defaults to the working directory."""
    value = os.environ.get("NFT_GALLERY_STATIC_DIR")
    return Path(value).expanduser() if value else Path.cwd()


def resolve_manifest_paths(static_dir: Path | None = None) -> tuple[Path, Path]:
    """Images and metadata CSV files served by the manifest endpoints."""
    static_dir = static_dir or resolve_static_dir()
    images = os.environ.get("NFT_GALLERY_IMAGES_CSV")
    metadata = os.environ.get("NFT_GALLERY_METADATA_CSV")
    return (
        Path(images).expanduser() if images else static_dir / IMAGES_MANIFEST,
        Path(metadata).expanduser() if metadata else static_dir / METADATA_MANIFEST,
    )


def resolve_log_level() -> str:
    """Log level name, from NFT_GALLERY_LOG_LEVEL if set."""
    return os.environ.get("NFT_GALLERY_LOG_LEVEL", "INFO").upper()
