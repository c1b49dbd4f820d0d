"""Background prefetch of metadata to populate the search index."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from loguru import logger

from nft_gallery.config import INDEX_LIMIT, INDEX_PACE_INTERVAL
from nft_gallery.core.metadata.store import MetadataStore
from nft_gallery.core.scheduling import paced
from nft_gallery.core.search.index import SearchIndex
from nft_gallery.errors import ContentFetchError
from nft_gallery.models.item import Item
from nft_gallery.protocols import FetcherProtocol


@dataclass(frozen=True)
class IndexingStats:
    """Summary of one indexing run."""

    indexed: int
    skipped: int
    failed: int


class BackgroundIndexer:
    """Index a bounded prefix of the collection, one item at a time.

    Items are fetched strictly in manifest order and never concurrently; a
    pause of `pace_interval` seconds follows each fetch to bound the request
    rate. A second `run` while one is in progress returns immediately.
    """

    def __init__(
        self,
        items: Sequence[Item],
        store: MetadataStore,
        index: SearchIndex,
        fetcher: FetcherProtocol,
        *,
        limit: int = INDEX_LIMIT,
        pace_interval: float = INDEX_PACE_INTERVAL,
    ) -> None:
        self.items = items
        self.store = store
        self.index = index
        self.fetcher = fetcher
        self.limit = limit
        self.pace_interval = pace_interval
        self.is_indexing = False

    def _unindexed(self, candidates: Sequence[Item], skipped: list[int]) -> Iterator[Item]:
        # Checked lazily: an overlay open may index an item while we sleep.
        for item in candidates:
            if self.index.is_indexed(item.id):
                skipped.append(item.id)
                continue
            yield item

    async def run(self) -> IndexingStats | None:
        """Run one indexing pass. Returns None if a pass is already running."""
        if self.is_indexing:
            logger.debug("Background indexing already running")
            return None

        self.is_indexing = True
        logger.info("Starting background indexing for search...")
        indexed = failed = 0
        skipped: list[int] = []
        try:
            candidates = self.items[: self.limit]
            async for item in paced(self._unindexed(candidates, skipped), self.pace_interval):
                try:
                    metadata = await self.store.get_or_fetch(item, self.fetcher)
                except ContentFetchError as exc:
                    logger.warning("Error indexing item {}: {}", item.id, exc)
                    failed += 1
                    continue
                self.index.index_one(item.id, metadata)
                if self.index.is_indexed(item.id):
                    indexed += 1
                else:
                    failed += 1
        finally:
            self.is_indexing = False

        logger.info(
            "Background indexing complete! {} items ready for search "
            "({} indexed, {} already indexed, {} failed)",
            len(self.index),
            indexed,
            len(skipped),
            failed,
        )
        return IndexingStats(indexed=indexed, skipped=len(skipped), failed=failed)
