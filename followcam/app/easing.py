"""Easing curves for zoom transitions, looked up by name.

Every curve maps progress in ``[0, 1]`` to eased progress in ``[0, 1]``
and is monotonic.  Unknown names fall back to the table's default
(``"Balanced"``) so a project authored with a newer curve set still
renders.
"""

import logging
import math
from typing import Callable, Dict, Iterator

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]


def lerp(start: float, end: float, t: float) -> float:
    """Linear interpolation between *start* and *end*."""
    return start * (1.0 - t) + end * t


def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(max_val, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


# ── Curves ──────────────────────────────────────────────────────────


def linear(t: float) -> float:
    return t


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out — symmetric, passes through 0.5 at the midpoint."""
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - pow(-2.0 * t + 2.0, 3) / 2.0


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1.0) / 2.0


def ease_out_quint(t: float) -> float:
    """Quintic ease-out — fast start, decelerates asymptotically to zero.

    f(t) = 1 - (1-t)⁵

    Roughly 80% of the movement happens in the first 40% of the
    duration, the rest stretches into an almost-motionless arrival.
    """
    inv = 1.0 - t
    return 1.0 - inv * inv * inv * inv * inv


def ease_out_expo(t: float) -> float:
    if t >= 1.0:
        return 1.0
    return 1.0 - pow(2.0, -10.0 * t)


def ease_in_out_quart(t: float) -> float:
    if t < 0.5:
        return 8.0 * t * t * t * t
    t -= 1.0
    return 1.0 - 8.0 * t * t * t * t


DEFAULT_EASING = "Balanced"

BUILTIN_EASINGS: Dict[str, Easing] = {
    "Linear": linear,
    "Balanced": ease_in_out_cubic,
    "Smooth": ease_in_out_sine,
    "Gentle": ease_out_quint,
    "Snappy": ease_out_expo,
    "Dynamic": ease_in_out_quart,
}


class EasingTable:
    """Registry of named easing curves with a mandatory default.

    Lookups clamp the input progress to ``[0, 1]`` before evaluating
    the curve, so callers may pass raw phase progress.
    """

    def __init__(self, default: str = DEFAULT_EASING) -> None:
        self._curves: Dict[str, Easing] = dict(BUILTIN_EASINGS)
        if default not in self._curves:
            raise ValueError(f"Unknown default easing: {default!r}")
        self.default = default

    def register(self, name: str, fn: Easing) -> None:
        """Add or replace a named curve."""
        self._curves[name] = fn

    def get(self, name: str) -> Easing:
        """Return the curve for *name*, or the default curve."""
        fn = self._curves.get(name)
        if fn is None:
            if name:
                logger.debug("Unknown easing %r, using %s", name, self.default)
            fn = self._curves[self.default]
        return fn

    def ease(self, name: str, progress: float) -> float:
        """Evaluate the named curve at *progress* (clamped)."""
        return self.get(name)(clamp01(progress))

    def names(self) -> Iterator[str]:
        return iter(sorted(self._curves))

    def __contains__(self, name: object) -> bool:
        return name in self._curves


# Shared table; build an EasingTable for custom curves instead of mutating this one
DEFAULT_TABLE = EasingTable()


def get_easing(name: str) -> Easing:
    """Look up a curve in the default table (falls back to ``Balanced``)."""
    return DEFAULT_TABLE.get(name)
