"""Project the view state into grid cells and overlay content."""

from nft_gallery.config import GALLERY_ITEM_TITLE
from nft_gallery.core.metadata.store import MetadataStore
from nft_gallery.core.view.overlay import overlay_content
from nft_gallery.core.view.state import ViewStateMachine
from nft_gallery.models.view import GalleryCell, GalleryFrame, OverlayState, OverlayView


def _overlay_view(view: ViewStateMachine, store: MetadataStore) -> OverlayView | None:
    item = view.current_item
    if view.overlay is OverlayState.CLOSED or item is None:
        return None
    content = overlay_content(item, store.get(item.id) or {})
    return OverlayView(
        state=view.overlay,
        image_url=item.image_url,
        poem_title=content.poem_title,
        poem_text=content.poem_text,
        show_poem=view.overlay is OverlayState.POEM,
        show_image=view.overlay is OverlayState.IMAGE,
    )


def render_frame(
    view: ViewStateMachine, store: MetadataStore, *, message: str | None = None
) -> GalleryFrame:
    """Build the frame for the current state without changing what is visible."""
    total = view.total_count
    shown = len(view.displayed)
    cells = tuple(
        GalleryCell(
            id=item.id,
            title=GALLERY_ITEM_TITLE,
            label=item.name,
            image_url=item.image_url,
        )
        for item in view.displayed
    )
    return GalleryFrame(
        cells=cells,
        overlay=_overlay_view(view, store),
        info_visible=view.info_visible,
        shown_count=shown,
        total_count=total,
        load_more_label=f"Load More ({shown}/{total})" if shown < total else None,
        loading=view.is_loading,
        message=message,
    )
