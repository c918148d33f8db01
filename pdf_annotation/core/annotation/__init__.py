"""
Core annotation module - UI-agnostic region synchronization.

This module keeps highlights drawn over a PDF in sync with the
annotation store and can be used with any renderer (Web, Qt, tests).
"""

import pdf_annotation.utils.i18n  # noqa:F401

from .document import PDFDocument
from .events import AnnotationEvent, EventType, EventEmitter
from .serialization import derive_region, deserialize_region, serialize_region
from .session import RegionSyncSession
from .state import Highlight, Region, Selection, VisualState
from .store import RegionStore

__all__ = [
    "PDFDocument",
    "RegionSyncSession",
    "RegionStore",
    "AnnotationEvent",
    "EventType",
    "EventEmitter",
    "Highlight",
    "Region",
    "Selection",
    "VisualState",
    "derive_region",
    "deserialize_region",
    "serialize_region",
]
