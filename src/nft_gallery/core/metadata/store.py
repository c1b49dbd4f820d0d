"""In-memory cache of fetched metadata documents."""

from loguru import logger

from nft_gallery.errors import ContentFetchError
from nft_gallery.models.item import Item, MetadataDocument
from nft_gallery.protocols import FetcherProtocol


class MetadataStore:
    """Append-only map of item id -> metadata document.

    Documents are immutable upstream, so there is no eviction and nothing is
    refetched once cached. Concurrent fetches of the same id may both land;
    the second write replaces an equal value.
    """

    def __init__(self) -> None:
        self._documents: dict[int, MetadataDocument] = {}

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, item_id: int) -> MetadataDocument | None:
        return self._documents.get(item_id)

    def put(self, item_id: int, document: MetadataDocument) -> None:
        self._documents[item_id] = document

    async def get_or_fetch(self, item: Item, fetcher: FetcherProtocol) -> MetadataDocument:
        """Return the cached document for `item`, fetching and storing it if needed.

        Raises:
            ContentFetchError: on fetch failure, or if the body is not a JSON object.
        """
        cached = self._documents.get(item.id)
        if cached is not None:
            return cached

        document = await fetcher.fetch_json(item.metadata_url)
        if not isinstance(document, dict):
            msg = f"expected a JSON object, got {type(document).__name__}"
            raise ContentFetchError(item.metadata_url, msg)

        self.put(item.id, document)
        logger.debug("Cached metadata for item {}", item.id)
        return document
