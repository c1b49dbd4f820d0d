"""Gallery application: explicit context plus user event handling."""

import random
from dataclasses import dataclass, field

from loguru import logger

from nft_gallery.config import (
    INDEX_LIMIT,
    INDEX_PACE_INTERVAL,
    INDEX_START_DELAY,
    OVERLAY_ERROR_MESSAGE,
    SEARCH_DEBOUNCE,
)
from nft_gallery.core.manifest.loader import load_items
from nft_gallery.core.metadata.store import MetadataStore
from nft_gallery.core.scheduling import DelayedTask, Debouncer
from nft_gallery.core.search.index import SearchIndex
from nft_gallery.core.search.indexer import BackgroundIndexer, IndexingStats
from nft_gallery.core.view.render import render_frame
from nft_gallery.core.view.state import ViewStateMachine
from nft_gallery.errors import ContentFetchError, ManifestLoadError
from nft_gallery.models.item import Item
from nft_gallery.models.view import Filter, GalleryFrame, OverlayState
from nft_gallery.protocols import FetcherProtocol


@dataclass
class GalleryContext:
    """Shared resources for one gallery instance."""

    fetcher: FetcherProtocol
    images_url: str
    metadata_url: str
    items: tuple[Item, ...] = ()
    store: MetadataStore = field(default_factory=MetadataStore)
    index: SearchIndex = field(default_factory=SearchIndex)
    rng: random.Random = field(default_factory=random.Random)


class GalleryApp:
    """Drive the gallery from user events.

    Every handler mutates the view state machine and returns the frame to
    paint. Must be used from inside a running event loop.
    """

    def __init__(
        self,
        ctx: GalleryContext,
        *,
        search_debounce: float = SEARCH_DEBOUNCE,
        index_delay: float = INDEX_START_DELAY,
        index_limit: int = INDEX_LIMIT,
        pace_interval: float = INDEX_PACE_INTERVAL,
    ) -> None:
        self.ctx = ctx
        self.index_limit = index_limit
        self.pace_interval = pace_interval
        self.view = ViewStateMachine(ctx.items, ctx.index, rng=ctx.rng)
        self.indexer = self._make_indexer()
        # Set once the manifests fail to load; the gallery stays in this state.
        self.error: str | None = None
        # Transient message, cleared by the next event.
        self.message: str | None = None

        self._by_id: dict[int, Item] = {item.id: item for item in ctx.items}
        self._index_task = DelayedTask(index_delay, self.run_indexing, name="background-indexing")
        self._search = Debouncer(search_debounce, self._apply_search)

    def _make_indexer(self) -> BackgroundIndexer:
        return BackgroundIndexer(
            self.ctx.items,
            self.ctx.store,
            self.ctx.index,
            self.ctx.fetcher,
            limit=self.index_limit,
            pace_interval=self.pace_interval,
        )

    def frame(self) -> GalleryFrame:
        if self.error is not None:
            return GalleryFrame(
                cells=(),
                overlay=None,
                info_visible=self.view.info_visible,
                shown_count=0,
                total_count=0,
                load_more_label=None,
                message=self.error,
            )
        return render_frame(self.view, self.ctx.store, message=self.message)

    def item(self, item_id: int) -> Item | None:
        return self._by_id.get(item_id)

    async def start(self) -> GalleryFrame:
        """Load the manifests, paint the first page and schedule background indexing."""
        self.view.is_loading = True
        try:
            items = await load_items(self.ctx.fetcher, self.ctx.images_url, self.ctx.metadata_url)
        except ManifestLoadError as exc:
            self.error = str(exc)
            return self.frame()
        finally:
            self.view.is_loading = False

        self.ctx.items = tuple(items)
        self._by_id = {item.id: item for item in self.ctx.items}
        self.view = ViewStateMachine(self.ctx.items, self.ctx.index, rng=self.ctx.rng)
        self.indexer = self._make_indexer()

        self.view.render_page()
        self._index_task.schedule()
        logger.info("Gallery ready with {} items", len(self.ctx.items))
        return self.frame()

    async def run_indexing(self) -> IndexingStats | None:
        return await self.indexer.run()

    async def shutdown(self) -> None:
        """Cancel pending scheduled work. In-flight fetches are not interrupted."""
        self._search.cancel()
        self._index_task.cancel()
        await self._index_task.wait()

    # --- Events ---

    def search_input(self, text: str) -> None:
        """A keystroke in the search box; applied after the debounce quiet period."""
        self._search.call(text)

    async def flush_search(self) -> GalleryFrame:
        """Wait until the pending search input (if any) has been applied."""
        await self._search.flush()
        return self.frame()

    async def _apply_search(self, text: str) -> None:
        self.message = None
        self.view.set_search_term(text)
        logger.debug(
            "Search {!r}: {} results", self.view.search_term, self.view.total_count
        )

    def select_filter(self, value: Filter | str) -> GalleryFrame:
        self.message = None
        self.view.set_filter(value)
        return self.frame()

    def load_more(self) -> GalleryFrame:
        self.message = None
        self.view.load_more()
        return self.frame()

    async def click_item(self, item_id: int) -> GalleryFrame:
        """Click on a grid cell: open, advance or close the overlay."""
        self.message = None
        item = self.item(item_id)
        if item is None:
            logger.warning("Click on unknown item {}", item_id)
            return self.frame()

        target = self.view.target_for_click(item)
        if target is OverlayState.POEM:
            await self._open_poem(item)
        elif target is OverlayState.IMAGE:
            self.view.show_image()
        else:
            self.view.close_overlay()
        return self.frame()

    async def _open_poem(self, item: Item) -> None:
        self.view.is_loading = True
        try:
            metadata = await self.ctx.store.get_or_fetch(item, self.ctx.fetcher)
        except ContentFetchError:
            logger.exception("Error loading overlay for item {}", item.id)
            self.message = OVERLAY_ERROR_MESSAGE
            return
        finally:
            self.view.is_loading = False

        if not self.ctx.index.is_indexed(item.id):
            self.ctx.index.index_one(item.id, metadata)
        self.view.open_poem(item)

    def click_poem(self) -> GalleryFrame:
        self.message = None
        self.view.click_poem()
        return self.frame()

    def click_image(self) -> GalleryFrame:
        self.message = None
        self.view.click_image()
        return self.frame()

    def close_overlay(self) -> GalleryFrame:
        self.view.close_overlay()
        return self.frame()

    def show_info(self) -> GalleryFrame:
        self.view.show_info()
        return self.frame()

    def hide_info(self) -> GalleryFrame:
        self.view.hide_info()
        return self.frame()

    def press_key(self, key: str) -> GalleryFrame:
        self.view.press_key(key)
        return self.frame()
