"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from nft_gallery.config import (
    DEFAULT_PORT,
    resolve_log_level,
    resolve_manifest_paths,
    resolve_port,
    resolve_static_dir,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "NFT_GALLERY_PORT",
        "NFT_GALLERY_STATIC_DIR",
        "NFT_GALLERY_IMAGES_CSV",
        "NFT_GALLERY_METADATA_CSV",
        "NFT_GALLERY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_port() == DEFAULT_PORT == 3001
    assert resolve_static_dir() == tmp_path
    assert resolve_manifest_paths() == (
        tmp_path / "data-images.csv",
        tmp_path / "data-metadata.csv",
    )
    assert resolve_log_level() == "INFO"


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NFT_GALLERY_PORT", "8080")
    monkeypatch.setenv("NFT_GALLERY_STATIC_DIR", str(tmp_path))
    monkeypatch.setenv("NFT_GALLERY_METADATA_CSV", str(tmp_path / "meta.csv"))
    monkeypatch.setenv("NFT_GALLERY_LOG_LEVEL", "warning")

    assert resolve_port() == 8080
    assert resolve_static_dir() == tmp_path
    images, metadata = resolve_manifest_paths()
    assert images == tmp_path / "data-images.csv"
    assert metadata == tmp_path / "meta.csv"
    assert resolve_log_level() == "WARNING"


def test_manifest_paths_follow_explicit_static_dir(tmp_path: Path) -> None:
    site = tmp_path / "site"
    assert resolve_manifest_paths(site)[0] == site / "data-images.csv"
