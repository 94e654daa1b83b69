"""
Per-page storage of overlay objects.
"""
import copy
import logging
from typing import Any, Dict, List, Optional

from .models import Overlay, next_overlay_id

logger = logging.getLogger(__name__)

StoreState = Dict[int, List[Overlay]]


class OverlayStore:
    """
    Owns the overlays of an open document, keyed by 0-based page index.

    The order of a page's list is its z-order: later entries paint on top
    and are hit-tested first.
    """

    def __init__(self):
        self._pages: StoreState = {}

    def add(self, page_index: int, overlay: Overlay) -> int:
        """
        Add an overlay to the top of a page.

        Args:
            page_index: 0-based page index
            overlay: Overlay to add; its id is replaced with a fresh one

        Returns:
            The id assigned to the overlay
        """
        if page_index < 0:
            raise ValueError(f"Invalid page index: {page_index}")

        overlay.id = next_overlay_id()
        overlay.enforce_limits()
        self._pages.setdefault(page_index, []).append(overlay)
        return overlay.id

    def update(self, page_index: int, overlay_id: int, **fields: Any) -> bool:
        """
        Merge field values into an existing overlay.

        Args:
            page_index: 0-based page index
            overlay_id: Id of the overlay to update
            **fields: Field values to assign

        Returns:
            True if the overlay was found and updated
        """
        overlay = self.find(page_index, overlay_id)
        if overlay is None:
            logger.debug("Ignoring update of missing overlay %s on page %s",
                         overlay_id, page_index)
            return False

        for name, value in fields.items():
            if name == "id" or not hasattr(overlay, name):
                raise AttributeError(
                    f"{type(overlay).__name__} has no editable field '{name}'"
                )
            setattr(overlay, name, value)
        overlay.enforce_limits()
        return True

    def remove(self, page_index: int, overlay_id: int) -> bool:
        """
        Remove an overlay by id.

        Returns:
            True if an overlay was removed, False if the id was unknown
        """
        overlays = self._pages.get(page_index, [])
        for index, overlay in enumerate(overlays):
            if overlay.id == overlay_id:
                del overlays[index]
                return True
        return False

    def get(self, page_index: int) -> List[Overlay]:
        """Get the overlays of a page in z-order (bottom first)."""
        return list(self._pages.get(page_index, []))

    def find(self, page_index: int, overlay_id: int) -> Optional[Overlay]:
        for overlay in self._pages.get(page_index, []):
            if overlay.id == overlay_id:
                return overlay
        return None

    def index_of(self, page_index: int, overlay_id: int) -> int:
        """Z-position of an overlay on its page, or -1."""
        for index, overlay in enumerate(self._pages.get(page_index, [])):
            if overlay.id == overlay_id:
                return index
        return -1

    def clear_page(self, page_index: int) -> bool:
        """Remove every overlay on a page. Returns True if anything was removed."""
        return bool(self._pages.pop(page_index, None))

    def clear(self) -> None:
        """Remove every overlay on every page."""
        self._pages.clear()

    def pages(self) -> List[int]:
        """Page indices that currently hold overlays, ascending."""
        return sorted(page for page, overlays in self._pages.items() if overlays)

    def count(self, page_index: Optional[int] = None) -> int:
        if page_index is not None:
            return len(self._pages.get(page_index, []))
        return sum(len(overlays) for overlays in self._pages.values())

    def snapshot(self) -> StoreState:
        """Deep copy of the full store state."""
        return copy.deepcopy(
            {page: overlays for page, overlays in self._pages.items() if overlays}
        )

    def restore(self, state: StoreState) -> None:
        """Replace the full store state with a copy of ``state``."""
        self._pages = copy.deepcopy(state)
