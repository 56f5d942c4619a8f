"""Frame layout and renderer adapters.

Turns a :class:`TransformResult` into something a painter can use.
The convention matches the bounded pan solver: the video layer is
scaled about its pivot first, then translated.  Both the live preview
(``QTransform`` for ``QPainter``) and the exporter (2×3 affine matrix)
go through :func:`placement`, so they agree pixel for pixel.
"""

from dataclasses import dataclass

import numpy as np
from PySide6.QtGui import QTransform

from .models import Geometry, TransformResult


@dataclass(frozen=True)
class FrameLayout:
    """Where the (letterboxed) video box sits on the output canvas."""
    x: float
    y: float
    width: float
    height: float

    @property
    def content(self) -> Geometry:
        """Frame content dimensions to pass to the zoom engine."""
        return Geometry(self.width, self.height)


@dataclass(frozen=True)
class LayerPlacement:
    """Pivot (frame-local px), scale and pivot position (canvas px)."""
    pivot_x: float
    pivot_y: float
    scale: float
    position_x: float
    position_y: float


def fit_frame(
    output_w: float,
    output_h: float,
    video_w: float,
    video_h: float,
    padding_percent: float = 0.0,
) -> FrameLayout:
    """Fit a video of *video_w* × *video_h* into the padded output canvas.

    Preserves aspect ratio and centres the box.  *padding_percent* is
    the margin on each side as a percentage of the output size.
    """
    pad = padding_percent / 100.0
    avail_w = max(output_w * (1.0 - 2.0 * pad), 0.0)
    avail_h = max(output_h * (1.0 - 2.0 * pad), 0.0)

    if video_w <= 0 or video_h <= 0 or avail_w <= 0 or avail_h <= 0:
        w, h = avail_w, avail_h
    else:
        aspect = video_w / video_h
        if avail_w / avail_h > aspect:
            h = avail_h
            w = h * aspect
        else:
            w = avail_w
            h = w / aspect

    return FrameLayout(x=(output_w - w) / 2.0, y=(output_h - h) / 2.0, width=w, height=h)


def placement(result: TransformResult, layout: FrameLayout) -> LayerPlacement:
    """Resolve *result* against *layout* into pivot / scale / position."""
    ox, oy = result.origin()
    pivot_x = ox * layout.width
    pivot_y = oy * layout.height
    return LayerPlacement(
        pivot_x=pivot_x,
        pivot_y=pivot_y,
        scale=result.scale,
        position_x=layout.x + pivot_x + result.translate_x,
        position_y=layout.y + pivot_y + result.translate_y,
    )


def to_affine(result: TransformResult, layout: FrameLayout) -> np.ndarray:
    """2×3 float64 matrix mapping frame-local pixels to canvas pixels."""
    p = placement(result, layout)
    s = p.scale
    return np.array(
        [
            [s, 0.0, p.position_x - s * p.pivot_x],
            [0.0, s, p.position_y - s * p.pivot_y],
        ],
        dtype=np.float64,
    )


def to_qtransform(result: TransformResult, layout: FrameLayout) -> QTransform:
    """Same mapping as :func:`to_affine`, for ``QPainter.setTransform``."""
    m = to_affine(result, layout)
    return QTransform(
        float(m[0, 0]), float(m[1, 0]),
        float(m[0, 1]), float(m[1, 1]),
        float(m[0, 2]), float(m[1, 2]),
    )
