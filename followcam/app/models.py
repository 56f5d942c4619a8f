"""Core data models for FollowCam.

Defines the dataclasses passed to and returned from the zoom engine:
pointer samples, zoom regions, geometry pairs, the computed transform
and the per-session carryover state.  Input models support JSON
serialization via ``to_dict()`` / ``from_dict()`` using the camelCase
keys of the editor's project format.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Sample:
    """A single pointer sample captured during recording.

    Coordinates are in **recording pixels**.  Sequences of samples are
    ordered by timestamp (non-decreasing, duplicates allowed).
    """
    timestamp: float  # seconds since recording start
    x: float
    y: float
    type: str = "move"
    pressed: bool = False
    cursor_image_key: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to a plain dict for JSON storage."""
        d = {"timestamp": self.timestamp, "x": self.x, "y": self.y, "type": self.type}
        if self.pressed:
            d["pressed"] = True
        if self.cursor_image_key:
            d["cursorImageKey"] = self.cursor_image_key
        return d

    @staticmethod
    def from_dict(d: dict) -> "Sample":
        """Reconstruct from a dict produced by ``to_dict()``."""
        return Sample(
            timestamp=float(d["timestamp"]),
            x=float(d["x"]),
            y=float(d["y"]),
            type=d.get("type", "move"),
            pressed=bool(d.get("pressed", False)),
            cursor_image_key=d.get("cursorImageKey"),
        )


@dataclass(frozen=True)
class ZoomRegion:
    """An authored interval during which the camera zooms in, holds and zooms out.

    ``target_x`` / ``target_y`` are a normalized offset from the frame
    centre in ``[-0.5, 0.5]``; the pivot is ``target + 0.5``.  In
    ``"auto"`` mode the camera follows the cursor while zoomed, any
    other mode keeps it stationary.
    """

    id: str
    start_time: float  # seconds
    duration: float  # seconds, > 0
    zoom_level: float
    target_x: float = 0.0
    target_y: float = 0.0
    mode: str = "auto"
    easing: str = "Balanced"
    transition_duration: float = 0.5  # seconds, < duration / 2

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def zoom_in_end(self) -> float:
        return self.start_time + self.transition_duration

    @property
    def zoom_out_start(self) -> float:
        return self.start_time + self.duration - self.transition_duration

    @property
    def is_auto(self) -> bool:
        return self.mode == "auto"

    def contains(self, t: float) -> bool:
        """True if *t* falls in ``[start_time, start_time + duration)``."""
        return self.start_time <= t < self.start_time + self.duration

    def to_dict(self) -> dict:
        """Serialize to a plain dict for JSON storage."""
        return {
            "id": self.id,
            "startTime": self.start_time,
            "duration": self.duration,
            "zoomLevel": self.zoom_level,
            "targetX": self.target_x,
            "targetY": self.target_y,
            "mode": self.mode,
            "easing": self.easing,
            "transitionDuration": self.transition_duration,
        }

    @staticmethod
    def from_dict(d: dict) -> "ZoomRegion":
        """Reconstruct from a dict, ignoring unknown keys for forward compat."""
        return ZoomRegion(
            id=str(d["id"]),
            start_time=float(d["startTime"]),
            duration=float(d["duration"]),
            zoom_level=float(d["zoomLevel"]),
            target_x=float(d.get("targetX", 0.0)),
            target_y=float(d.get("targetY", 0.0)),
            mode=d.get("mode", "auto"),
            easing=d.get("easing", "Balanced"),
            transition_duration=float(d.get("transitionDuration", 0.5)),
        )


@dataclass(frozen=True)
class Geometry:
    """Width/height pair: recording pixel space or rendered frame box."""
    width: float
    height: float

    @property
    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    @staticmethod
    def from_dict(d: dict) -> "Geometry":
        return Geometry(width=float(d["width"]), height=float(d["height"]))


def format_origin(x: float, y: float) -> str:
    """Format a normalized pivot as a CSS-style percentage pair."""
    return f"{x * 100:g}% {y * 100:g}%"


def parse_origin(origin: str) -> Tuple[float, float]:
    """Inverse of :func:`format_origin` — ``"25% 75%"`` → ``(0.25, 0.75)``."""
    x_str, y_str = origin.split()
    return float(x_str.rstrip("%")) / 100.0, float(y_str.rstrip("%")) / 100.0


@dataclass(frozen=True)
class TransformResult:
    """Camera transform for one query time.

    The renderer scales by ``scale`` about ``transform_origin`` and then
    translates by ``(translate_x, translate_y)`` canvas pixels.
    """
    scale: float
    translate_x: float
    translate_y: float
    transform_origin: str = "50% 50%"

    @staticmethod
    def identity() -> "TransformResult":
        return TransformResult(scale=1.0, translate_x=0.0, translate_y=0.0)

    def origin(self) -> Tuple[float, float]:
        """Pivot as normalized ``(x, y)`` in ``[0, 1]``."""
        return parse_origin(self.transform_origin)

    def to_dict(self) -> dict:
        return {
            "scale": self.scale,
            "translateX": self.translate_x,
            "translateY": self.translate_y,
            "transformOrigin": self.transform_origin,
        }


@dataclass(frozen=True)
class EngineState:
    """Carryover between consecutive engine calls of one session.

    Holds the pan shown on the previous call and the time it was shown
    at.  Every engine call returns a new instance; never share one
    between a preview and an export.
    """
    previous_pan_x: float = 0.0
    previous_pan_y: float = 0.0
    last_query_time: float = 0.0

    @staticmethod
    def initial() -> "EngineState":
        return EngineState()


DEFAULT_FPS = 60
