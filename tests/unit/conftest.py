"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest

from nft_gallery.models.item import Item
from tests.unit.fakes import FakeFetcher

IMAGES_URL = "data-images.csv"
METADATA_URL = "data-metadata.csv"


def make_items(count: int) -> list[Item]:
    """Items 0..count-1 named like the real collection (#1, #2, ...)."""
    return [
        Item(
            id=i,
            name=f"#{i + 1}",
            image_url=f"https://img.example/{i + 1}.png",
            metadata_url=f"https://meta.example/{i + 1}.json",
        )
        for i in range(count)
    ]


def make_metadata(number: int, **traits: Any) -> dict[str, Any]:
    """A metadata document with the given traits (underscores become spaces)."""
    return {
        "name": f"Midnight Ape #{number}",
        "description": "An ape of the midnight hour.",
        "attributes": [
            {"trait_type": name.replace("_", " "), "value": value} for name, value in traits.items()
        ],
    }


def manifest_texts(count: int) -> tuple[str, str]:
    """Images and metadata manifests for `count` items."""
    images = ["name,url"] + [
        f"image_{i}.jpeg,https://img.example/{i}.png" for i in range(1, count + 1)
    ]
    metadata = ["name,url"] + [
        f"meta{i}.json,https://meta.example/{i}.json" for i in range(1, count + 1)
    ]
    return "\n".join(images) + "\n", "\n".join(metadata) + "\n"


def write_local_collection(
    root: Path, count: int, *, undecodable: tuple[int, ...] = ()
) -> tuple[Path, Path]:
    """Manifests plus one metadata file per item on disk, for the real client.

    Item numbers listed in `undecodable` get a metadata file that is not valid UTF-8.
    """
    images = ["name,url"]
    metadata = ["name,url"]
    for i in range(1, count + 1):
        doc = root / f"{i}.json"
        if i in undecodable:
            doc.write_bytes(b"\xff\xfe")
        else:
            doc.write_text(json.dumps(make_metadata(i, Background="Gold")), encoding="utf-8")
        images.append(f"image_{i}.jpeg,https://img.example/{i}.png")
        metadata.append(f"meta{i}.json,{doc}")
    images_path = root / "data-images.csv"
    metadata_path = root / "data-metadata.csv"
    images_path.write_text("\n".join(images) + "\n", encoding="utf-8")
    metadata_path.write_text("\n".join(metadata) + "\n", encoding="utf-8")
    return images_path, metadata_path


def populated_fetcher(count: int, **traits_by_number: dict[str, Any]) -> FakeFetcher:
    """A fetcher serving manifests and metadata for `count` items.

    `traits_by_number` maps "n<number>" to extra traits for that item.
    """
    fetcher = FakeFetcher()
    images, metadata = manifest_texts(count)
    fetcher.add_text(IMAGES_URL, images)
    fetcher.add_text(METADATA_URL, metadata)
    for i in range(1, count + 1):
        traits = traits_by_number.get(f"n{i}", {})
        fetcher.add_json(f"https://meta.example/{i}.json", make_metadata(i, **traits))
    return fetcher


@pytest.fixture
def fetcher() -> FakeFetcher:
    return populated_fetcher(
        5,
        n1={
            "Background": "Gold",
            "Lore_Poem": "Under the moon\nthe ape sings",
            "Emoji_Song": "🌙🎶",
        },
        n2={"Background": "Blue"},
    )
