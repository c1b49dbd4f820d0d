"""Substring search over fetched metadata."""

from loguru import logger

from nft_gallery.models.item import MetadataDocument, SearchIndexEntry


def build_searchable_text(metadata: MetadataDocument) -> str:
    """Concatenate attribute traits and values, then name, then description.

    Everything is lowercased and space-joined. Attributes missing either a
    trait name or a value are skipped.
    """
    parts: list[str] = []
    for attr in metadata.get("attributes") or []:
        trait, value = attr.get("trait_type"), attr.get("value")
        if trait and value:
            parts.append(str(trait).lower())
            parts.append(str(value).lower())

    if metadata.get("name"):
        parts.append(str(metadata["name"]).lower())
    if metadata.get("description"):
        parts.append(str(metadata["description"]).lower())

    return " ".join(parts)


class SearchIndex:
    """Map of item id -> normalized searchable text.

    A missing entry means "not indexed yet", never "no matches".
    """

    def __init__(self) -> None:
        self._entries: dict[int, SearchIndexEntry] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, item_id: int) -> SearchIndexEntry | None:
        return self._entries.get(item_id)

    def index_one(self, item_id: int, metadata: MetadataDocument) -> None:
        """Index (or re-index) a single item. Malformed metadata is logged, not raised."""
        try:
            text = build_searchable_text(metadata)
        except Exception:
            logger.exception("Error indexing metadata for id {}", item_id)
            return

        self._entries[item_id] = SearchIndexEntry(
            id=item_id, searchable_text=text, metadata=metadata
        )

    def is_indexed(self, item_id: int) -> bool:
        return item_id in self._entries

    def contains(self, item_id: int, term: str) -> bool:
        """Whether the indexed text for `item_id` contains `term` (already lowercased)."""
        entry = self._entries.get(item_id)
        if entry is None:
            return False
        return term in entry.searchable_text
