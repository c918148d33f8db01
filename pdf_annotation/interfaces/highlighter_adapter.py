"""
Highlighter adapter for region sync sessions.

Bridges the RegionSyncSession with a PDF highlight renderer.
"""

import logging
from gettext import gettext as _
from typing import Any, Optional

from ..core.annotation import (
    AnnotationEvent,
    EventType,
    RegionSyncSession,
    Selection,
    VisualState,
)
from ..core.annotation.contracts import HighlightRenderer
from ..core.annotation.visual import needs_scroll

logger = logging.getLogger(__name__)


class HighlighterAdapter:
    """
    Adapter connecting RegionSyncSession to a highlight renderer.

    Provides a layer that:
    - Pushes the highlight list on every region change
    - Turns finished selections into regions
    - Drives result selection from highlight clicks
    - Applies one color and visibility to every part of a highlight
    """

    def __init__(self, session: RegionSyncSession, renderer: HighlightRenderer):
        """
        Initialize adapter.

        Args:
            session: Core region sync session
            renderer: Renderer painting highlights over the PDF
        """
        self.session = session
        self.renderer = renderer

        # Subscribe to session events
        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Setup event handlers for session events."""
        self.session.events.on(
            EventType.REGIONS_CHANGED,
            self._on_regions_changed
        )
        self.session.events.on(
            EventType.DOCUMENT_READY,
            self._on_document_ready
        )

    def _on_regions_changed(self, event: AnnotationEvent):
        """Redraw after any region store mutation."""
        self.renderer.set_highlights(self.session.highlights())

    def _on_document_ready(self, event: AnnotationEvent):
        """Pick up regions that exist in the store before the first draw."""
        self.session.needs_update()

    def detach(self):
        """Stop listening to the session."""
        self.session.events.off(EventType.REGIONS_CHANGED, self._on_regions_changed)
        self.session.events.off(EventType.DOCUMENT_READY, self._on_document_ready)

    # Callbacks given to the renderer

    def on_document_loaded(self):
        """Renderer finished loading the PDF."""
        self.session.document.mark_ready()

    def on_selection_finished(self, position: Any, content: Optional[dict] = None) -> bool:
        """
        Handle a finished selection.

        Returns:
            True if a region was created and the selection was cleared
        """
        if not self.session.document.has_label_states:
            logger.warning(_("No labels selected"))
            return False

        result = self.session.add_region(Selection.from_highlight(position, content))
        if not result:
            return False

        self.renderer.clear_selection()
        return True

    def on_highlight_click(self, region_id: str) -> bool:
        """
        Handle a click on a highlight.

        Returns:
            True if the backing result got selected
        """
        region = self.session.document.store.get(region_id)
        if region is None or region.hidden:
            return False

        result = self.session.result_for(region)
        if result is None:
            return False

        self.session.annotation.select_area(result)
        for other in self.session.regions:
            if other.id != region_id:
                self.apply_visual_state(other.id, self.session.visual_state_for(other))
        self.select_region(region_id)
        return True

    # Visual state

    def select_region(self, region_id: str) -> Optional[VisualState]:
        """Show a region as selected and scroll to it if it is off screen."""
        state = self.session.selection_state(region_id, selected=True)
        if state is None:
            return None

        self.apply_visual_state(region_id, state)

        if state.visible and needs_scroll(
            self.renderer.part_boxes(region_id), self.renderer.viewport()
        ):
            self.renderer.scroll_into_view(region_id)
        return state

    def unselect_region(self, region_id: str) -> Optional[VisualState]:
        """Show a region dimmed."""
        state = self.session.selection_state(region_id, selected=False)
        if state is not None:
            self.apply_visual_state(region_id, state)
        return state

    def toggle_hidden(self, region_id: str) -> Optional[VisualState]:
        state = self.session.toggle_hidden(region_id)
        if state is not None:
            self.apply_visual_state(region_id, state)
        return state

    def refresh_colors(self):
        """Re-apply the derived state of every region, e.g. after a label change."""
        for region in self.session.regions:
            self.apply_visual_state(region.id, self.session.visual_state_for(region))

    def apply_visual_state(self, region_id: str, state: VisualState):
        """Style every rendered part of a highlight the same way."""
        for part_id in list(self.renderer.part_ids(region_id)):
            self.renderer.style_part(region_id, part_id, state.color, state.visible)
