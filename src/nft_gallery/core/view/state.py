"""Filter, search, pagination and overlay state for the gallery."""

import random
from collections.abc import Sequence

from loguru import logger

from nft_gallery.config import ITEMS_PER_PAGE, RANDOM_SAMPLE_SIZE
from nft_gallery.core.search.index import SearchIndex
from nft_gallery.models.item import Item
from nft_gallery.models.view import Filter, OverlayState, ViewState

ESCAPE_KEY = "Escape"


class ViewStateMachine:
    """Derive what is visible from the filter and search term.

    `page_cursor` only moves forward; any filter or search change resets it
    together with the visible accumulation. The overlay is keyed by a current
    item, which is set exactly when the overlay is not closed.
    """

    def __init__(
        self,
        items: Sequence[Item],
        index: SearchIndex,
        *,
        page_size: int = ITEMS_PER_PAGE,
        random_sample_size: int = RANDOM_SAMPLE_SIZE,
        rng: random.Random | None = None,
    ) -> None:
        self.items = items
        self.index = index
        self.page_size = page_size
        self.random_sample_size = random_sample_size
        self.rng = rng or random.Random()

        self.filter = Filter.ALL
        self.search_term = ""
        self.page_cursor = 0
        self.displayed: list[Item] = []
        self.is_loading = False

        self.overlay = OverlayState.CLOSED
        self.current_item: Item | None = None
        self.info_visible = False

        # Random sample drawn for the current filter session, so that later
        # pages continue the same sample.
        self._session_sample: list[Item] | None = None

    def snapshot(self) -> ViewState:
        return ViewState(
            filter=self.filter,
            search_term=self.search_term,
            page_cursor=self.page_cursor,
            overlay=self.overlay,
            current_item=self.current_item,
        )

    # --- Filtering ---

    def _matches(self, item: Item, term: str) -> bool:
        if term in item.name.lower() or term in str(item.id):
            return True
        return self.index.contains(item.id, term)

    def filtered_items(self) -> list[Item]:
        """Items matching the current search term and filter.

        With the random filter this draws a fresh sample on every call.
        """
        filtered = list(self.items)
        if self.search_term:
            filtered = [item for item in filtered if self._matches(item, self.search_term)]

        if self.filter is Filter.RANDOM:
            self.rng.shuffle(filtered)
            filtered = filtered[: self.random_sample_size]

        return filtered

    def current_set(self) -> list[Item]:
        """The set being paginated: a fixed sample for random, live results otherwise."""
        if self.filter is not Filter.RANDOM:
            return self.filtered_items()
        if self._session_sample is None:
            self._session_sample = self.filtered_items()
        return self._session_sample

    @property
    def total_count(self) -> int:
        return len(self.current_set())

    @property
    def has_more(self) -> bool:
        return len(self.displayed) < self.total_count

    # --- Pagination ---

    def _reset(self) -> None:
        self.page_cursor = 0
        self.displayed = []
        self._session_sample = None

    def render_page(self) -> list[Item]:
        """Append the next page of the current set to the visible items."""
        if self.page_cursor == 0:
            self.displayed = []

        source = self.current_set()
        start = self.page_cursor * self.page_size
        page = source[start : start + self.page_size]
        self.displayed.extend(page)
        self.page_cursor += 1
        logger.debug(
            "Rendered page {}: {} items ({}/{})",
            self.page_cursor - 1,
            len(page),
            len(self.displayed),
            len(source),
        )
        return page

    def load_more(self) -> list[Item]:
        """Render the next page, unless a load is in flight or nothing is left."""
        if self.is_loading or not self.has_more:
            return []
        return self.render_page()

    def set_search_term(self, term: str) -> list[Item]:
        """Apply a search term and render the first page of results."""
        self.search_term = term.lower().strip()
        self._reset()
        return self.render_page()

    def set_filter(self, value: Filter | str) -> list[Item]:
        """Switch the collection filter and render the first page."""
        self.filter = Filter(value)
        self._reset()
        return self.render_page()

    # --- Overlay ---

    def target_for_click(self, item: Item) -> OverlayState:
        """State a click on grid cell `item` leads to.

        Repeated clicks on the same cell cycle poem -> image -> closed; a
        click on any other cell restarts at the poem.
        """
        if self.overlay is OverlayState.CLOSED or self.current_item != item:
            return OverlayState.POEM
        if self.overlay is OverlayState.POEM:
            return OverlayState.IMAGE
        return OverlayState.CLOSED

    def open_poem(self, item: Item) -> None:
        self.overlay = OverlayState.POEM
        self.current_item = item

    def show_image(self) -> None:
        if self.overlay is OverlayState.POEM:
            self.overlay = OverlayState.IMAGE

    def close_overlay(self) -> None:
        self.overlay = OverlayState.CLOSED
        self.current_item = None

    def click_poem(self) -> None:
        """Click on the poem surface: reveal the full image."""
        if self.overlay is OverlayState.POEM:
            self.show_image()

    def click_image(self) -> None:
        """Click on the full image: close the overlay."""
        if self.overlay is OverlayState.IMAGE:
            self.close_overlay()

    def show_info(self) -> None:
        self.info_visible = True

    def hide_info(self) -> None:
        self.info_visible = False

    def press_key(self, key: str) -> None:
        if key == ESCAPE_KEY:
            self.close_overlay()
            self.hide_info()
