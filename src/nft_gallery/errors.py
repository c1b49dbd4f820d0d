"""Exception types raised by the gallery."""


class GalleryError(Exception):
    """Base class for gallery errors."""


class ContentFetchError(GalleryError):
    """A manifest or metadata document could not be fetched or decoded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url!r}: {reason}")
        self.url = url
        self.reason = reason


class ManifestLoadError(GalleryError):
    """The collection manifests could not be loaded. Fatal to the initial render."""
