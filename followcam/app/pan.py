"""Bounded pan solver.

Given a smoothed cursor position, computes the translation that would
centre it in the canvas and clamps it so the zoomed frame never
uncovers a canvas edge.  Translations are in the pre-scale convention:
the renderer scales about the pivot first, then translates.
"""

from typing import Optional, Tuple

from .easing import clamp
from .models import Geometry


def pan_bounds(
    origin: Tuple[float, float],
    zoom_level: float,
    frame: Geometry,
) -> Tuple[float, float, float, float]:
    """Legal translation envelope ``(min_tx, max_tx, min_ty, max_ty)``.

    Both bounds collapse to 0 at zoom level 1.
    """
    ox, oy = origin
    k = (zoom_level - 1.0) / zoom_level
    max_tx = ox * frame.width * k
    min_tx = -(1.0 - ox) * frame.width * k
    max_ty = oy * frame.height * k
    min_ty = -(1.0 - oy) * frame.height * k
    return min_tx, max_tx, min_ty, max_ty


def bounded_pan(
    position: Optional[Tuple[float, float]],
    origin: Tuple[float, float],
    zoom_level: float,
    recording: Geometry,
    frame: Geometry,
) -> Tuple[float, float]:
    """Translation ``(tx, ty)`` centring *position* as far as the bounds allow.

    *position* is in recording pixels, *origin* is the normalized pivot.
    Returns ``(0, 0)`` for a missing position or degenerate geometry.
    """
    if position is None or not recording.is_valid or not frame.is_valid:
        return 0.0, 0.0
    if zoom_level <= 0:
        return 0.0, 0.0

    ox, oy = origin
    nx = position[0] / recording.width
    ny = position[1] / recording.height

    # Pan that puts the cursor at the canvas centre after scaling
    pan_x = (0.5 - ((nx - ox) * zoom_level + ox)) * frame.width
    pan_y = (0.5 - ((ny - oy) * zoom_level + oy)) * frame.height

    min_tx, max_tx, min_ty, max_ty = pan_bounds(origin, zoom_level, frame)
    tx = clamp(pan_x / zoom_level, min_tx, max_tx)
    ty = clamp(pan_y / zoom_level, min_ty, max_ty)
    return tx, ty
