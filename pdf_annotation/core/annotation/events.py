"""
Event system for region synchronization.

Provides a decoupled way for the annotation core to notify renderers
about region changes without depending on a specific UI framework.
"""

import logging
from enum import Enum
from gettext import gettext as _
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of events that can occur while syncing regions."""

    # Region store events
    REGIONS_CHANGED = "regions_changed"
    REGIONS_REBUILT = "regions_rebuilt"

    # Region lifecycle events
    REGION_CREATED = "region_created"
    REGION_DELETED = "region_deleted"
    SELECTION_REJECTED = "selection_rejected"

    # Visual events
    VISUAL_STATE_CHANGED = "visual_state_changed"

    # Document events
    DOCUMENT_READY = "document_ready"
    DOCUMENT_DESTROYED = "document_destroyed"


@dataclass
class AnnotationEvent:
    """Event that occurs during annotation."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows renderers to subscribe to region changes without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Subscribe to an event type."""
        if not isinstance(event_type, EventType):
            raise ValueError(
                _("Unknown event type: {event_type}").format(event_type=event_type)
            )
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[AnnotationEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners and callback in self._listeners[event_type]:
            self._listeners[event_type].remove(callback)

    def emit(self, event: AnnotationEvent):
        """Emit an event to all subscribers."""
        # copy so a listener may unsubscribe itself while being notified
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    _("Error in listener for {event_type}").format(
                        event_type=event.event_type.value
                    )
                )

    def has_listeners(self, event_type: EventType) -> bool:
        return bool(self._listeners.get(event_type))

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
