"""Cursor position smoothing.

Turns the raw pointer track into a stable pan target by running an
exponential moving average over a short lookback window ending at the
query time.  Small jitters (inside the dead zone) are damped harder
than intentional moves.  The filter is causal: it reads samples at or
before the query time plus one lookahead sample for sub-frame
interpolation, so live preview and export agree.
"""

import math
from typing import Optional, Sequence, Tuple

from .config import DEAD_ZONE_PX, SMOOTHING_FACTOR, SMOOTHING_WINDOW_S
from .easing import lerp
from .models import Sample
from .timeline import find_last_index

# Share of the smoothing factor applied to moves inside the dead zone
DEAD_ZONE_DAMPING = 0.3


def smoothed_position(
    samples: Sequence[Sample],
    t: float,
    smoothing_factor: float = SMOOTHING_FACTOR,
    dead_zone: float = DEAD_ZONE_PX,
    window: float = SMOOTHING_WINDOW_S,
) -> Optional[Tuple[float, float]]:
    """Stabilized cursor ``(x, y)`` at time *t*, or ``None`` before the first sample."""
    end_idx = find_last_index(samples, t)
    if end_idx is None:
        return None

    # Warm the average up from a bit before t
    start_idx = find_last_index(samples, max(0.0, t - window))
    if start_idx is None:
        start_idx = 0

    sx = samples[start_idx].x
    sy = samples[start_idx].y

    for i in range(start_idx + 1, end_idx + 1):
        raw = samples[i]
        dist = math.hypot(raw.x - sx, raw.y - sy)
        factor = smoothing_factor if dist > dead_zone else smoothing_factor * DEAD_ZONE_DAMPING
        sx = lerp(sx, raw.x, factor)
        sy = lerp(sy, raw.y, factor)

    # Sub-frame step toward the next sample removes stepping between samples
    if end_idx + 1 < len(samples):
        last = samples[end_idx]
        nxt = samples[end_idx + 1]
        span = nxt.timestamp - last.timestamp
        if span > 0:
            progress = (t - last.timestamp) / span
            fx = lerp(sx, nxt.x, smoothing_factor)
            fy = lerp(sy, nxt.y, smoothing_factor)
            return lerp(sx, fx, progress), lerp(sy, fy, progress)

    return sx, sy
