"""Domain models for the collection."""

from dataclasses import dataclass
from typing import Any

# Opaque JSON object fetched from an item's metadata URL.
MetadataDocument = dict[str, Any]


@dataclass(frozen=True)
class ManifestRow:
    """A single `name,url` row of a manifest."""

    name: str
    url: str


@dataclass(frozen=True)
class Item:
    """One collection entry, joining an image URL and a metadata URL."""

    id: int
    name: str
    image_url: str
    metadata_url: str


@dataclass(frozen=True)
class SearchIndexEntry:
    """Normalized searchable text for an indexed item."""

    id: int
    searchable_text: str
    metadata: MetadataDocument
