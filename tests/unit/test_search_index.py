"""Tests for the search index."""

from nft_gallery.core.search.index import SearchIndex, build_searchable_text
from tests.unit.conftest import make_metadata


def test_searchable_text_orders_attributes_then_name_then_description() -> None:
    metadata = {
        "description": "Lost In The Dark",
        "name": "Midnight Ape #7",
        "attributes": [
            {"trait_type": "Background", "value": "Gold"},
            {"trait_type": "Eyes", "value": "Laser"},
        ],
    }

    text = build_searchable_text(metadata)

    assert text == "background gold eyes laser midnight ape #7 lost in the dark"


def test_searchable_text_skips_incomplete_attributes() -> None:
    metadata = {
        "attributes": [
            {"trait_type": "Background"},
            {"value": "Orphan"},
            {"trait_type": "", "value": "Empty"},
            {"trait_type": "Level", "value": 3},
        ]
    }

    assert build_searchable_text(metadata) == "level 3"


def test_searchable_text_of_empty_document_is_empty() -> None:
    assert build_searchable_text({}) == ""


def test_index_one_makes_item_searchable() -> None:
    index = SearchIndex()

    index.index_one(4, make_metadata(5, Background="Gold"))

    assert index.is_indexed(4)
    assert index.contains(4, "gold")
    assert not index.contains(4, "silver")


def test_contains_is_false_for_unindexed_item() -> None:
    index = SearchIndex()
    assert not index.is_indexed(1)
    assert index.contains(1, "gold") is False


def test_index_one_is_idempotent() -> None:
    index = SearchIndex()
    metadata = make_metadata(1, Background="Gold", Fur="Night")

    index.index_one(0, metadata)
    first = index.get(0)
    index.index_one(0, metadata)

    assert first is not None
    assert index.get(0) == first
    assert len(index) == 1


def test_index_one_overwrites_previous_entry() -> None:
    index = SearchIndex()
    index.index_one(0, make_metadata(1, Background="Gold"))
    index.index_one(0, make_metadata(1, Background="Silver"))

    assert index.contains(0, "silver")
    assert not index.contains(0, "gold")


def test_malformed_metadata_leaves_item_unindexed() -> None:
    index = SearchIndex()

    index.index_one(0, {"attributes": ["not-a-dict"]})  # type: ignore[list-item]
    index.index_one(1, ["not", "a", "dict"])  # type: ignore[arg-type]

    assert not index.is_indexed(0)
    assert not index.is_indexed(1)
    assert len(index) == 0
