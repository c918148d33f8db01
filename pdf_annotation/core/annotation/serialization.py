"""
Conversion between regions and the task's persisted value shape.

A persisted region looks like::

    {"value": {"position": ..., "text": ..., "label": ..., "id": ...}}

where everything except ``position`` is optional.
"""

import copy
from gettext import gettext as _
from typing import Any, Dict, Optional

from .contracts import ExternalRegion
from .state import Region


def serialize_region(region: Region, save_text: bool = False) -> Dict[str, Any]:
    """
    Convert a region to its persisted value.

    Args:
        region: Region to serialize
        save_text: Whether the owning document persists extracted text

    Returns:
        Dictionary in the task's result format
    """
    value: Dict[str, Any] = {"position": copy.deepcopy(region.position)}

    if save_text and region.text is not None and region.text != "":
        value["text"] = region.text

    if region.label:
        value["label"] = region.label

    if region.id:
        value["id"] = region.id

    return {"value": value}


def deserialize_region(
    data: Dict[str, Any], document_name: str, result_id: Optional[str] = None
) -> Region:
    """
    Create a region from its persisted value.

    Raises:
        ValueError: If the value has no position or id
    """
    value = data.get("value", data)
    if value.get("position") is None:
        raise ValueError(_("Region value has no position"))
    if not value.get("id"):
        raise ValueError(_("Region value has no id"))

    return Region(
        id=value["id"],
        position=copy.deepcopy(value["position"]),
        document_name=document_name,
        label=value.get("label"),
        text=value.get("text"),
        result_id=result_id,
    )


def derive_region(external: ExternalRegion, document_name: str) -> Region:
    """
    Derive a region from the annotation store's view of it.

    Text missing from the store's region is fetched from its first
    result and cached back on the store's region.

    Raises:
        Whatever the malformed record raises; callers skip such records.
    """
    if external.position is None:
        raise ValueError(_("Region {id} has no position").format(id=external.id))

    results = list(external.results or [])
    if not results:
        raise ValueError(_("Region {id} has no result").format(id=external.id))

    text = external.text
    if not text:
        text = results[0].value.get("text")
        external.update_text(text)

    labels = list(external.labels or [])
    return Region(
        id=external.id,
        position=copy.deepcopy(external.position),
        document_name=document_name,
        label=labels[0] if labels else None,
        text=text,
        hidden=bool(external.hidden),
        result_id=results[0].id,
    )
