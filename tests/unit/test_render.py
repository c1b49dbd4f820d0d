"""Tests for frame rendering."""

from nft_gallery.core.metadata.store import MetadataStore
from nft_gallery.core.search.index import SearchIndex
from nft_gallery.core.view.overlay import find_trait, overlay_content
from nft_gallery.core.view.render import render_frame
from nft_gallery.core.view.state import ViewStateMachine
from nft_gallery.models.view import OverlayState
from tests.unit.conftest import make_items, make_metadata


def test_frame_lists_visible_cells_and_counts() -> None:
    view = ViewStateMachine(make_items(120), SearchIndex())
    view.render_page()

    frame = render_frame(view, MetadataStore())

    assert len(frame.cells) == 50
    assert frame.cells[0].label == "#1"
    assert frame.cells[0].title == "Midnight Ape"
    assert frame.cells[0].image_url == "https://img.example/1.png"
    assert frame.shown_count == 50
    assert frame.total_count == 120
    assert frame.load_more_label == "Load More (50/120)"
    assert frame.overlay is None


def test_load_more_label_hidden_when_everything_shown() -> None:
    view = ViewStateMachine(make_items(10), SearchIndex())
    view.render_page()

    frame = render_frame(view, MetadataStore())

    assert frame.shown_count == 10
    assert frame.load_more_label is None


def test_render_does_not_change_visible_items() -> None:
    view = ViewStateMachine(make_items(80), SearchIndex())
    view.render_page()

    render_frame(view, MetadataStore())
    render_frame(view, MetadataStore())

    assert view.page_cursor == 1
    assert len(view.displayed) == 50


def test_poem_overlay_shows_lore_poem_and_emoji_song() -> None:
    items = make_items(3)
    store = MetadataStore()
    store.put(1, make_metadata(2, Lore_Poem="Night falls", Emoji_Song="🌙"))
    view = ViewStateMachine(items, SearchIndex())
    view.open_poem(items[1])

    overlay = render_frame(view, store).overlay

    assert overlay is not None
    assert overlay.state is OverlayState.POEM
    assert overlay.poem_text == "Night falls"
    assert overlay.poem_title == "🌙"
    assert overlay.show_poem and not overlay.show_image
    assert overlay.image_url == items[1].image_url


def test_image_overlay_hides_text() -> None:
    items = make_items(3)
    view = ViewStateMachine(items, SearchIndex())
    view.open_poem(items[0])
    view.show_image()

    overlay = render_frame(view, MetadataStore()).overlay

    assert overlay is not None
    assert overlay.show_image and not overlay.show_poem


def test_overlay_content_falls_back_to_placeholders() -> None:
    item = make_items(1)[0]

    content = overlay_content(item, make_metadata(1, Background="Gold"))

    assert content.poem_text == "No lore poem available for this Midnight Ape."
    assert content.poem_title == "🌑🦧✨"


def test_find_trait_handles_missing_or_malformed_attributes() -> None:
    assert find_trait({}, "Lore Poem") is None
    assert find_trait({"attributes": "oops"}, "Lore Poem") is None
    metadata = {"attributes": [None, {"trait_type": "Lore Poem", "value": "x"}]}
    assert find_trait(metadata, "Lore Poem") == "x"
