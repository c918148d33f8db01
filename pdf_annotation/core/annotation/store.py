"""
Ordered region storage for one document.

Every mutation swaps the whole backing tuple in a single assignment and
then notifies subscribers with the change set, so a reader never sees a
half-updated list.
"""

from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .events import AnnotationEvent, EventEmitter, EventType
from .state import Region


class RegionStore:
    """Owns the ordered regions of a single document."""

    def __init__(self, events: Optional[EventEmitter] = None):
        self.events = events or EventEmitter()
        self._regions: Tuple[Region, ...] = ()

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __contains__(self, region_id: str) -> bool:
        return self.get(region_id) is not None

    @property
    def regions(self) -> Tuple[Region, ...]:
        return self._regions

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(r.id for r in self._regions)

    def get(self, region_id: str) -> Optional[Region]:
        for region in self._regions:
            if region.id == region_id:
                return region
        return None

    def index(self) -> Dict[str, Region]:
        """Registry of regions keyed by id."""
        return {r.id: r for r in self._regions}

    def append(self, region: Region):
        """Add a region after every existing one."""
        self._regions = self._regions + (region,)
        self._notify("append", [region.id])

    def remove(self, region_id: str) -> bool:
        """
        Remove the region with the given id.

        Returns:
            True if a region was removed, False if the id was unknown
        """
        for position, region in enumerate(self._regions):
            if region.id == region_id:
                self._regions = self._regions[:position] + self._regions[position + 1:]
                self._notify("remove", [region_id])
                return True
        return False

    def replace(self, region: Region) -> bool:
        """Swap in a new snapshot of an existing region, keeping its slot."""
        regions = list(self._regions)
        for position, current in enumerate(regions):
            if current.id == region.id:
                regions[position] = region
                self._regions = tuple(regions)
                self._notify("update", [region.id])
                return True
        return False

    def rebuild_from(self, regions: Iterable[Region]):
        """Replace the whole ordered sequence at once."""
        self._regions = tuple(regions)
        self._notify("rebuild", list(self.ids))

    def clear(self):
        removed = list(self.ids)
        self._regions = ()
        self._notify("clear", removed)

    def _notify(self, action: str, ids: Sequence[str]):
        self.events.emit(
            AnnotationEvent(
                EventType.REGIONS_CHANGED,
                {"action": action, "ids": list(ids), "regions": self._regions},
            )
        )
