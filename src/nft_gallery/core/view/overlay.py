"""Extract overlay text from a metadata document."""

from typing import Any

from nft_gallery.config import (
    EMOJI_SONG_PLACEHOLDER,
    EMOJI_SONG_TRAIT,
    LORE_POEM_PLACEHOLDER,
    LORE_POEM_TRAIT,
)
from nft_gallery.models.item import Item, MetadataDocument
from nft_gallery.models.view import OverlayContent


def find_trait(metadata: MetadataDocument, trait_type: str) -> Any | None:
    """Value of the first attribute named `trait_type`, or None."""
    attributes = metadata.get("attributes")
    if not isinstance(attributes, list):
        return None
    for attr in attributes:
        if isinstance(attr, dict) and attr.get("trait_type") == trait_type:
            return attr.get("value")
    return None


def overlay_content(item: Item, metadata: MetadataDocument) -> OverlayContent:
    """Lore Poem and Emoji Song for `item`, falling back to placeholders."""
    poem = find_trait(metadata, LORE_POEM_TRAIT)
    song = find_trait(metadata, EMOJI_SONG_TRAIT)
    return OverlayContent(
        item=item,
        poem_title=str(song) if song else EMOJI_SONG_PLACEHOLDER,
        poem_text=str(poem) if poem else LORE_POEM_PLACEHOLDER,
    )
