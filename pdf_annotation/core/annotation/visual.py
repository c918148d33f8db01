"""
Pure functions deriving how a region should look.

These functions have no side effects and can be tested in isolation;
pushing the result to the screen is the renderer adapter's job.
"""

import logging
import re
from gettext import gettext as _
from typing import Optional, Sequence, Tuple

import numpy as np

from .state import Region, VisualState

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")
UNSELECTED_ALPHA = "26"
FALLBACK_BACKGROUND = "#000000"


def is_hex_color(color: Optional[str]) -> bool:
    """Check for a ``#RRGGBB`` color string."""
    return bool(color) and HEX_COLOR.fullmatch(color) is not None


def dim_color(color: str, alpha: str = UNSELECTED_ALPHA) -> str:
    """
    Reduce the opacity of a color by appending a hex alpha channel.

    Args:
        color: Color as ``#RRGGBB``
        alpha: Two hex digits of alpha, ``26`` is about 15% opacity

    Returns:
        ``#RRGGBBAA`` color, or the input unchanged if it is not ``#RRGGBB``
    """
    if not is_hex_color(color):
        logger.warning(
            _("Cannot dim non-hex color {color!r}, using it as is").format(color=color)
        )
        return color
    return color + alpha


def visual_state(
    region: Optional[Region],
    is_selected: bool,
    label_background: Optional[str],
    has_result: bool = True,
    alpha: str = UNSELECTED_ALPHA,
    fallback: str = FALLBACK_BACKGROUND,
) -> VisualState:
    """
    Compute the color and visibility of a region.

    Args:
        region: Region to display
        is_selected: Whether its backing result is the selected one
        label_background: Background configured for the region's label
        has_result: False when the backing result no longer exists
        alpha: Alpha suffix used for unselected regions
        fallback: Background used when the label has none

    Returns:
        VisualState shared by every rendered part of the region
    """
    if region is None or region.hidden or not has_result:
        return VisualState.hidden()

    background = label_background or fallback
    if is_selected:
        return VisualState(color=background, visible=True)
    return VisualState(color=dim_color(background, alpha), visible=True)


def union_box(boxes: Sequence[Sequence[float]]) -> Optional[Tuple[float, float, float, float]]:
    """
    Bounding box covering all parts of a highlight.

    Args:
        boxes: Boxes as (left, top, right, bottom)

    Returns:
        Union box, or None if there are no boxes
    """
    if boxes is None or len(boxes) == 0:
        return None

    arr = np.asarray(boxes, dtype=np.float64).reshape(-1, 4)
    left, top = arr[:, 0].min(), arr[:, 1].min()
    right, bottom = arr[:, 2].max(), arr[:, 3].max()
    return (float(left), float(top), float(right), float(bottom))


def is_fully_visible(box: Sequence[float], viewport: Sequence[float]) -> bool:
    """
    Check that a box lies entirely inside the viewport.

    Args:
        box: Box as (left, top, right, bottom)
        viewport: Visible area as (left, top, right, bottom)

    Returns:
        True if no edge of the box is outside the viewport
    """
    b = np.asarray(box, dtype=np.float64)
    v = np.asarray(viewport, dtype=np.float64)
    return bool(np.all(b[:2] >= v[:2]) and np.all(b[2:] <= v[2:]))


def needs_scroll(part_boxes: Sequence[Sequence[float]], viewport: Sequence[float]) -> bool:
    """Whether selecting a highlight should scroll it into view."""
    box = union_box(part_boxes)
    if box is None:
        return False
    return not is_fully_visible(box, viewport)
