"""Gallery viewer for an NFT image/metadata collection."""

from nft_gallery.api import ContentStoreClient
from nft_gallery.app import GalleryApp, GalleryContext
from nft_gallery.errors import ContentFetchError, GalleryError, ManifestLoadError
from nft_gallery.protocols import FetcherProtocol

__all__ = [
    "ContentFetchError",
    "ContentStoreClient",
    "FetcherProtocol",
    "GalleryApp",
    "GalleryContext",
    "GalleryError",
    "ManifestLoadError",
]
