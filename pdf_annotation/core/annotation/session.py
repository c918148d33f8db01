"""
Region synchronization session.

Core logic keeping a document's regions in step with the annotation store.
UI-agnostic - renderers subscribe to events instead of being called.
"""

import copy
import dataclasses
import logging
from gettext import gettext as _
from typing import Any, Dict, List, Optional, Tuple

from easydict import EasyDict as edict

from ...config import default_config
from .contracts import Result
from .document import PDFDocument
from .events import AnnotationEvent, EventType
from .serialization import derive_region, serialize_region
from .state import REGION_TYPE, Highlight, Region, Selection, VisualState
from .visual import visual_state

logger = logging.getLogger(__name__)


class RegionSyncSession:
    """
    Keeps the regions of one document consistent with the annotation store.

    This class handles:
    - Creating results and regions from user selections
    - Rebuilding the regions from the store's authoritative list
    - Removing regions when their results are destroyed
    - Deriving the visual state of each region

    All region mutations go through :meth:`add_region`,
    :meth:`needs_update` and :meth:`delete_region`.
    """

    def __init__(self, document: PDFDocument, cfg: Optional[edict] = None):
        """
        Initialize sync session.

        Args:
            document: Document whose regions are kept in sync
            cfg: Configuration, see :func:`pdf_annotation.config.default_config`
        """
        self.document = document
        self.cfg = cfg or default_config()
        self.events = document.events

    @property
    def annotation(self):
        return self.document.annotation

    @property
    def regions(self) -> Tuple[Region, ...]:
        return self.document.regions

    def add_region(self, selection: Selection) -> Optional[Result]:
        """
        Turn a user selection into a labeled result and a region.

        Args:
            selection: Drawn position and extracted text

        Returns:
            The created result, or None if nothing was created
        """
        doc = self.document

        if not doc.is_ready:
            return self._reject("not_ready", _("Document {name} is not ready yet"))
        if not doc.selection_enabled:
            return self._reject(
                "selection_disabled", _("Selection is disabled for {name}")
            )

        states = doc.active_label_states()
        if not states:
            return self._reject("no_labels", _("No labels selected for {name}"))

        control = states[0]
        values = list(control.selected_values())
        labels = {control.value_type: values}

        region_id = doc.new_region_id(int(self.cfg.id_length))
        area_value = self._area_value(region_id, selection)

        try:
            result = self.annotation.create_result(area_value, labels, control, doc)
        except Exception:
            logger.exception(
                _("Failed to create result for region {id}").format(id=region_id)
            )
            result = None

        if not result:
            logger.warning(
                _("Annotation store did not create a result for region {id}").format(
                    id=region_id
                )
            )
            return None

        region = Region(
            id=region_id,
            position=copy.deepcopy(selection.position),
            document_name=doc.name,
            label=values[0],
            text=selection.text,
            result_id=getattr(result, "id", None),
        )
        doc.store.append(region)

        self.events.emit(
            AnnotationEvent(
                EventType.REGION_CREATED,
                {"id": region_id, "label": region.label, "labels": labels},
            )
        )
        return result

    def needs_update(self) -> Tuple[Region, ...]:
        """
        Rebuild every region from the annotation store.

        Records that fail to derive are logged and skipped. Every field,
        the hidden flag included, comes from the store.

        Returns:
            The regions now in the document
        """
        doc = self.document
        if doc.is_destroyed:
            return ()

        try:
            externals = list(self.annotation.regions_for(doc.name) or [])
        except Exception:
            logger.exception(
                _("Could not read regions of {name} from the annotation store").format(
                    name=doc.name
                )
            )
            return doc.regions

        regions: List[Region] = []
        seen = set()
        skipped = 0

        for external in externals:
            try:
                region = derive_region(external, doc.name)
            except Exception:
                logger.exception(
                    _("Skipping region {id} that could not be derived").format(
                        id=getattr(external, "id", None)
                    )
                )
                skipped += 1
                continue

            if region.id in seen:
                logger.warning(
                    _("Skipping duplicated region {id}").format(id=region.id)
                )
                skipped += 1
                continue

            seen.add(region.id)
            doc.adopt_id(region.id)
            regions.append(region)

        doc.store.rebuild_from(regions)

        self.events.emit(
            AnnotationEvent(
                EventType.REGIONS_REBUILT, {"count": len(regions), "skipped": skipped}
            )
        )
        return doc.regions

    def delete_region(self, region_id: str) -> bool:
        """
        Remove a region. Does not touch its backing result.

        Returns:
            True if a region was removed
        """
        removed = self.document.store.remove(region_id)
        if removed:
            self.events.emit(
                AnnotationEvent(EventType.REGION_DELETED, {"id": region_id})
            )
        return removed

    def on_result_destroyed(self, result: Result) -> bool:
        """Teardown callback the annotation store calls for each destroyed result."""
        return self.delete_region(result.area_id)

    def result_for(self, region: Region) -> Optional[Result]:
        """Backing result of a region, None if it was removed from the store."""
        return self.annotation.find_result_for_area(region.id)

    def visual_state_for(
        self, region: Region, selected: Optional[bool] = None
    ) -> VisualState:
        """
        Visual state of a region.

        Args:
            region: Region to display
            selected: Override of the result's selected flag
        """
        result = self.result_for(region)
        if selected is None:
            selected = bool(result is not None and result.selected)

        return visual_state(
            region,
            is_selected=selected,
            label_background=self.document.label_background(region.label),
            has_result=result is not None,
            alpha=self.cfg.unselected_alpha,
            fallback=self.document.highlight_color or self.cfg.fallback_background,
        )

    def toggle_hidden(self, region_id: str) -> Optional[VisualState]:
        """
        Flip a region's hidden flag, on the store's region first.

        Returns:
            The new visual state, or None if the region is unknown
        """
        region = self.document.store.get(region_id)
        if region is None:
            return None

        region = dataclasses.replace(region, hidden=not region.hidden)

        external = self._external_region(region_id)
        if external is None:
            logger.warning(
                _("Region {id} is not in the annotation store, hiding it locally").format(
                    id=region_id
                )
            )
        else:
            external.set_hidden(region.hidden)

        self.document.store.replace(region)

        state = self.visual_state_for(region)
        self._emit_visual(region, state)
        return state

    def selection_state(self, region_id: str, selected: bool) -> Optional[VisualState]:
        """Visual state a region takes when it gets selected or unselected."""
        region = self.document.store.get(region_id)
        if region is None:
            return None

        state = self.visual_state_for(region, selected=selected)
        self._emit_visual(region, state)
        return state

    def highlights(self) -> List[Highlight]:
        """
        Highlights the renderer should paint, in region order.

        Regions whose result is gone are left out until they are pruned.
        """
        highlights = []
        for region in self.document.regions:
            result = self.result_for(region)
            if result is None:
                logger.debug(
                    _("Region {id} has no result, not rendering it").format(
                        id=region.id
                    )
                )
                continue

            state = self.visual_state_for(region)
            highlights.append(
                Highlight(
                    id=region.id,
                    position=region.position,
                    label=region.label,
                    selected=bool(result.selected),
                    hidden=region.hidden,
                    color=state.color,
                )
            )
        return highlights

    def serialize(self) -> List[Dict[str, Any]]:
        """Persisted values of every region, in region order."""
        return [
            serialize_region(r, save_text=self.document.save_text_result)
            for r in self.document.regions
        ]

    def _area_value(self, region_id: str, selection: Selection) -> Dict[str, Any]:
        area_value: Dict[str, Any] = {
            "id": region_id,
            "object": self.document.name,
            "type": REGION_TYPE,
            "origin": "manual",
            "position": copy.deepcopy(selection.position),
        }
        if isinstance(selection.position, dict):
            for key, value in selection.position.items():
                area_value.setdefault(key, copy.deepcopy(value))
        area_value["text"] = selection.text
        area_value["classification"] = False
        return area_value

    def _external_region(self, region_id: str):
        try:
            externals = self.annotation.regions_for(self.document.name) or []
        except Exception:
            logger.exception(
                _("Could not read regions of {name} from the annotation store").format(
                    name=self.document.name
                )
            )
            return None

        for external in externals:
            if external.id == region_id:
                return external
        return None

    def _reject(self, reason: str, message: str):
        logger.warning(message.format(name=self.document.name))
        self.events.emit(
            AnnotationEvent(EventType.SELECTION_REJECTED, {"reason": reason})
        )
        return None

    def _emit_visual(self, region: Region, state: VisualState):
        self.events.emit(
            AnnotationEvent(
                EventType.VISUAL_STATE_CHANGED,
                {"id": region.id, "color": state.color, "visible": state.visible},
            )
        )
