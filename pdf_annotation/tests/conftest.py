"""
Test fixtures and utilities for pdf_annotation tests.

Provides in-memory stand-ins for the annotation store, its label
controls and the highlight renderer.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest


@dataclass
class FakeLabelControl:
    name: str = "label"
    value_type: str = "labels"
    backgrounds: Dict[str, str] = field(default_factory=dict)
    chosen: List[str] = field(default_factory=list)

    def selected_values(self) -> List[str]:
        return list(self.chosen)

    def background_for(self, label: str) -> Optional[str]:
        return self.backgrounds.get(label)


@dataclass
class FakeResult:
    id: str
    area_id: str
    value: Dict[str, Any]
    selected: bool = False


@dataclass
class FakeExternalRegion:
    id: str
    position: Any
    labels: List[str]
    text: Optional[str] = None
    results: List[FakeResult] = field(default_factory=list)
    selected: bool = False
    hidden: bool = False

    def update_text(self, text: Optional[str]) -> None:
        self.text = text

    def set_hidden(self, hidden: bool) -> None:
        self.hidden = hidden


class FakeAnnotationStore:
    """Annotation store keeping results and regions in plain lists."""

    def __init__(self):
        self.controls: Dict[str, List[FakeLabelControl]] = {}
        self.results: List[FakeResult] = []
        self.regs: List[FakeExternalRegion] = []
        self.on_destroy: List[Callable[[FakeResult], Any]] = []
        self.fail_creation = False
        self.created_calls: List[Dict[str, Any]] = []

    def label_controls(self, object_name: str):
        return self.controls.get(object_name, [])

    def create_result(self, area_value, labels, control, owner):
        self.created_calls.append(
            {"area_value": area_value, "labels": labels, "control": control, "owner": owner}
        )
        if self.fail_creation:
            return None

        area_id = area_value["id"]
        value = {"position": area_value["position"], "text": area_value.get("text")}
        value.update(labels)
        result = FakeResult(id=f"result-{area_id}", area_id=area_id, value=value)
        self.results.append(result)
        self.regs.append(
            FakeExternalRegion(
                id=area_id,
                position=area_value["position"],
                labels=list(labels[control.value_type]),
                text=area_value.get("text"),
                results=[result],
            )
        )
        return result

    def regions_for(self, object_name: str):
        return list(self.regs)

    def find_result_for_area(self, area_id: str):
        for result in self.results:
            if result.area_id == area_id:
                return result
        return None

    def select_area(self, result):
        for other in self.results:
            other.selected = other is result

    def destroy_result(self, result: FakeResult):
        """Remove a result the way an undo or delete would."""
        self.results.remove(result)
        self.regs = [r for r in self.regs if r.id != result.area_id]
        for callback in self.on_destroy:
            callback(result)


def make_external(region_id, position, label, text=None, result_text=None):
    """Build a store region backed by one result."""
    result = FakeResult(
        id=f"result-{region_id}",
        area_id=region_id,
        value={"position": position, "text": result_text, "labels": [label]},
    )
    return FakeExternalRegion(
        id=region_id, position=position, labels=[label], text=text, results=[result]
    )


@pytest.fixture
def person_control():
    """Label control with a red Person label."""
    return FakeLabelControl(
        name="label",
        value_type="labels",
        backgrounds={"Person": "#FF0000", "Org": "#00FF00"},
        chosen=["Person"],
    )


@pytest.fixture
def annotation_store(person_control):
    store = FakeAnnotationStore()
    store.controls["pdf"] = [person_control]
    return store


@pytest.fixture
def document(annotation_store):
    from pdf_annotation.core.annotation import PDFDocument

    doc = PDFDocument(
        "pdf",
        annotation_store,
        source_url="https://example.com/paper.pdf",
        save_text_result=True,
    )
    doc.mark_ready()
    return doc


@pytest.fixture
def session(document, annotation_store):
    from pdf_annotation.core.annotation import RegionSyncSession

    sync = RegionSyncSession(document)
    annotation_store.on_destroy.append(sync.on_result_destroyed)
    return sync


@pytest.fixture
def position():
    """Position of a one-line selection on the first page."""
    return {
        "pageNumber": 0,
        "boundingRect": {"x1": 10, "y1": 10, "x2": 110, "y2": 30, "width": 100, "height": 20},
        "rects": [{"x1": 10, "y1": 10, "x2": 110, "y2": 30, "width": 100, "height": 20}],
    }


@pytest.fixture
def mock_renderer():
    """Renderer drawing two parts per highlight inside a 1000x800 viewport."""
    renderer = Mock()
    renderer.part_ids = Mock(return_value=["part-0", "part-1"])
    renderer.part_boxes = Mock(return_value=[(10, 10, 110, 30), (10, 32, 60, 52)])
    renderer.viewport = Mock(return_value=(0, 0, 1000, 800))
    return renderer
