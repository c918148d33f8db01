"""
The PDF document object.

Holds the tag configuration, the ordered region store and the set of
region ids issued during the document's life.
"""

import logging
import random
import string
from gettext import gettext as _
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ...config import load_config
from .contracts import AnnotationStore, LabelControl
from .events import AnnotationEvent, EventEmitter, EventType
from .state import Region
from .store import RegionStore

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits
TRUE_VALUES = {"true", "yes", "1"}
FALSE_VALUES = {"false", "no", "0"}


def parse_bool(value: Any, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a tag attribute such as ``"true"`` or ``"no"``."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(_("Not a boolean attribute value: {value!r}").format(value=value))


def resolve_value(value: Optional[str], task_data: Optional[Mapping[str, Any]]) -> str:
    """
    Resolve a ``$key`` reference against the task data.

    Dotted keys walk nested dictionaries. Plain values are returned as is.
    """
    if not value:
        return ""
    if not value.startswith("$"):
        return value

    node: Any = task_data or {}
    for part in value[1:].split("."):
        if not isinstance(node, Mapping) or part not in node:
            logger.warning(
                _("Task data has no value for {ref}").format(ref=value)
            )
            return ""
        node = node[part]
    return "" if node is None else str(node)


class PDFDocument:
    """
    One rendered PDF and the regions drawn over it.

    The document is the only owner of its regions. Other components read
    them through :attr:`regions` and mutate them through the sync session.
    """

    def __init__(
        self,
        name: str,
        annotation: AnnotationStore,
        source_url: str = "",
        selection_enabled: bool = True,
        highlight_color: Optional[str] = None,
        show_labels: Optional[bool] = None,
        save_text_result: bool = False,
        events: Optional[EventEmitter] = None,
    ):
        self.name = name
        self.annotation = annotation
        self._source_url = source_url
        self.selection_enabled = selection_enabled
        self.highlight_color = highlight_color
        self.show_labels = show_labels
        self.save_text_result = save_text_result

        self.events = events or EventEmitter()
        self.store = RegionStore(self.events)

        self._issued_ids: Set[str] = set()
        self._ready = False
        self._destroyed = False

    @classmethod
    def from_attrs(
        cls,
        name: str,
        annotation: AnnotationStore,
        attrs: Mapping[str, Any],
        task_data: Optional[Mapping[str, Any]] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        """
        Create a document from the PDF tag attributes.

        Args:
            name: Tag name, used by label controls to point at the document
            annotation: Annotation store holding results
            attrs: Tag attributes (value, selectionenabled, highlightcolor,
                showlabels, savetextresult)
            task_data: Task data used to resolve ``$key`` values
            defaults: Attribute defaults, ``load_config().document`` if not given
        """
        if not isinstance(attrs, Mapping):
            raise ValueError(_("Tag attributes must be a mapping"))

        if defaults is None:
            defaults = load_config().document
        merged: Dict[str, Any] = dict(defaults)
        merged.update({k.lower(): v for k, v in attrs.items()})

        return cls(
            name=name,
            annotation=annotation,
            source_url=resolve_value(merged.get("value"), task_data),
            selection_enabled=parse_bool(merged.get("selectionenabled"), True),
            highlight_color=merged.get("highlightcolor"),
            show_labels=parse_bool(merged.get("showlabels")),
            save_text_result=parse_bool(merged.get("savetextresult"), False),
        )

    @property
    def source_url(self) -> str:
        return self._source_url

    @property
    def regions(self) -> Tuple[Region, ...]:
        return self.store.regions

    @property
    def is_ready(self) -> bool:
        return self._ready and not self._destroyed

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def label_states(self) -> List[LabelControl]:
        """Label controls connected to this document."""
        return list(self.annotation.label_controls(self.name) or [])

    @property
    def has_label_states(self) -> bool:
        return len(self.label_states()) > 0

    def active_label_states(self) -> List[LabelControl]:
        """Label controls with at least one value chosen by the user."""
        return [s for s in self.label_states() if s.selected_values()]

    def label_background(self, label: Optional[str]) -> Optional[str]:
        """Background of a label value, looked up in the first label control."""
        if label is None:
            return None
        states = self.label_states()
        if not states:
            return None
        return states[0].background_for(label)

    def mark_ready(self):
        """Called once the renderer finished loading the PDF."""
        if self._ready:
            return
        self._ready = True
        logger.debug(
            _("Document {name} is ready: {url}").format(
                name=self.name, url=self._source_url
            )
        )
        self.events.emit(
            AnnotationEvent(EventType.DOCUMENT_READY, {"name": self.name})
        )

    def new_region_id(self, length: int = 10) -> str:
        """Generate an id never issued before by this document."""
        while True:
            region_id = "".join(random.choice(ID_ALPHABET) for _i in range(length))
            if region_id not in self._issued_ids:
                self._issued_ids.add(region_id)
                return region_id

    def adopt_id(self, region_id: str):
        """Record an id that came from the annotation store."""
        self._issued_ids.add(region_id)

    def destroy(self):
        """Tear down when the tag is removed from the annotation."""
        if self._destroyed:
            return
        self.store.clear()
        self._destroyed = True
        self.events.emit(
            AnnotationEvent(EventType.DOCUMENT_DESTROYED, {"name": self.name})
        )
        self.events.clear()
