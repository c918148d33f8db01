"""
State for region synchronization.

Contains data classes representing highlights drawn over a PDF document.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

REGION_TYPE = "pdfregion"
TRANSPARENT = "transparent"


@dataclass(frozen=True)
class Selection:
    """A user-drawn selection reported by the renderer."""

    position: Any
    text: Optional[str] = None

    @classmethod
    def from_highlight(cls, position: Any, content: Optional[dict] = None):
        """Create from the renderer's (position, content) pair."""
        content = content or {}
        return cls(position=position, text=content.get("text"))


@dataclass(frozen=True)
class Region:
    """
    One labeled highlight over a PDF page.

    Regions are immutable snapshots; the owning document replaces them
    when their text or hidden flag changes. ``document_name`` is a lookup
    key into the document registry, never an owning reference.
    """

    id: str
    position: Any
    document_name: str
    label: Optional[str] = None
    text: Optional[str] = None
    hidden: bool = False
    result_id: Optional[str] = None

    def to_dict(self):
        """Convert to dictionary for debugging and snapshots."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(
            id=data["id"],
            position=data["position"],
            document_name=data["document_name"],
            label=data.get("label"),
            text=data.get("text"),
            hidden=data.get("hidden", False),
            result_id=data.get("result_id"),
        )


@dataclass(frozen=True)
class VisualState:
    """Color and visibility every rendered part of a region should show."""

    color: str
    visible: bool

    @classmethod
    def hidden(cls):
        return cls(color=TRANSPARENT, visible=False)


@dataclass(frozen=True)
class Highlight:
    """What the renderer needs to paint one region."""

    id: str
    position: Any
    label: Optional[str]
    selected: bool
    hidden: bool
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
