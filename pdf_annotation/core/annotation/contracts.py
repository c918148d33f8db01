"""
Contracts of the collaborators the core talks to.

The annotation store, its label controls and the highlight renderer live
outside this package; these protocols describe the parts of them we use.
"""

from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

BBox = Tuple[float, float, float, float]


class LabelControl(Protocol):
    """A labels control connected to the PDF object."""

    name: str
    value_type: str

    def selected_values(self) -> List[str]:
        """Currently chosen label values, in order."""

    def background_for(self, label: str) -> Optional[str]:
        """Configured background color of a label value."""


class Result(Protocol):
    """Canonical labeled record held by the annotation store."""

    id: str
    area_id: str
    value: Dict[str, Any]
    selected: bool


class ExternalRegion(Protocol):
    """Region of this object type as the annotation store sees it."""

    id: str
    position: Any
    labels: Sequence[str]
    text: Optional[str]
    results: Sequence[Result]
    selected: bool
    hidden: bool

    def update_text(self, text: Optional[str]) -> None:
        """Cache extracted text on the store's region."""

    def set_hidden(self, hidden: bool) -> None:
        """Record the user's show/hide choice on the store's region."""


class AnnotationStore(Protocol):
    """The external annotation store owning results."""

    def label_controls(self, object_name: str) -> Sequence[LabelControl]:
        """Label controls whose ``toName`` points at the object."""

    def create_result(
        self,
        area_value: Dict[str, Any],
        labels: Dict[str, List[str]],
        control: LabelControl,
        owner: Any,
    ) -> Optional[Result]:
        """Create a labeled result, or return None on failure."""

    def regions_for(self, object_name: str) -> Sequence[ExternalRegion]:
        """Authoritative ordered regions of the object (``regs``)."""

    def find_result_for_area(self, area_id: str) -> Optional[Result]:
        """Result backing an area, if it still exists."""

    def select_area(self, result: Result) -> None:
        """Make the result the selected one."""


class HighlightRenderer(Protocol):
    """Rendering collaborator that paints highlights over the pages."""

    def set_highlights(self, highlights: Sequence[Any]) -> None:
        """Replace the painted highlight set."""

    def part_ids(self, region_id: str) -> Sequence[Any]:
        """Rendered parts of a highlight (one per line of a selection)."""

    def style_part(self, region_id: str, part_id: Any, color: str, visible: bool) -> None:
        """Apply color and visibility to one rendered part."""

    def part_boxes(self, region_id: str) -> Sequence[BBox]:
        """Screen boxes of every rendered part."""

    def viewport(self) -> BBox:
        """Visible screen area as (left, top, right, bottom)."""

    def scroll_into_view(self, region_id: str) -> None:
        """Scroll so the highlight is visible."""

    def clear_selection(self) -> None:
        """Drop the in-progress text/area selection."""
