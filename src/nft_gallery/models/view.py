"""View models: what the gallery currently shows."""

from dataclasses import dataclass
from enum import Enum

from nft_gallery.models.item import Item


class Filter(str, Enum):
    """Collection filter selected by the user."""

    ALL = "all"
    RANDOM = "random"


class OverlayState(str, Enum):
    """Overlay presentation mode for the current item."""

    CLOSED = "closed"
    POEM = "poem"
    IMAGE = "image"


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the view state machine."""

    filter: Filter = Filter.ALL
    search_term: str = ""
    page_cursor: int = 0
    overlay: OverlayState = OverlayState.CLOSED
    current_item: Item | None = None


@dataclass(frozen=True)
class OverlayContent:
    """Text presented for an item when its overlay opens."""

    item: Item
    poem_title: str
    poem_text: str


@dataclass(frozen=True)
class GalleryCell:
    """A single grid cell."""

    id: int
    title: str
    label: str
    image_url: str


@dataclass(frozen=True)
class OverlayView:
    """Overlay as presented: which surface is visible and its content."""

    state: OverlayState
    image_url: str
    poem_title: str
    poem_text: str
    show_poem: bool
    show_image: bool


@dataclass(frozen=True)
class GalleryFrame:
    """Everything a presentation layer needs to paint the gallery."""

    cells: tuple[GalleryCell, ...]
    overlay: OverlayView | None
    info_visible: bool
    shown_count: int
    total_count: int
    load_more_label: str | None
    loading: bool = False
    message: str | None = None
