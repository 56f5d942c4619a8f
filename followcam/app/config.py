"""Camera tuning constants.

All values are empirical and were tuned by eye against 60 fps screen
recordings.  They are gathered into :class:`CameraSettings` so a
project can override individual values without touching the engine.
"""

import math
from dataclasses import dataclass


# ── Tuning constants ────────────────────────────────────────────────

SMOOTHING_FACTOR = 0.2          # EMA step toward each raw cursor sample
DEAD_ZONE_PX = 5.0              # moves shorter than this (recording px) get 0.3× smoothing
SMOOTHING_WINDOW_S = 0.3        # EMA warm-up lookback before the query time
PAN_SMOOTHING = 0.1             # hold-phase pan follow rate per reference frame
REFERENCE_FRAME_INTERVAL_S = 0.016  # frame interval PAN_SMOOTHING was tuned at (~60 fps)
SEEK_THRESHOLD_S = 0.5          # larger jumps between calls reset the carried pan
CURSOR_RELEASE = 0.05           # zoom-out fraction over which cursor tracking fades out
CONVERGENCE_POWER = 4.0         # zoom-out alpha → 1 as progress ** power


@dataclass(frozen=True)
class CameraSettings:
    """Immutable bundle of the camera tuning constants."""
    smoothing_factor: float = SMOOTHING_FACTOR
    dead_zone: float = DEAD_ZONE_PX
    smoothing_window: float = SMOOTHING_WINDOW_S
    pan_smoothing: float = PAN_SMOOTHING
    reference_frame_interval: float = REFERENCE_FRAME_INTERVAL_S
    seek_threshold: float = SEEK_THRESHOLD_S
    cursor_release: float = CURSOR_RELEASE
    convergence_power: float = CONVERGENCE_POWER

    def to_dict(self) -> dict:
        """Serialize with the project file's camelCase keys."""
        return {key: getattr(self, name) for name, key in _PROJECT_KEYS.items()}

    @staticmethod
    def from_dict(d: dict) -> "CameraSettings":
        """Build settings from a camelCase dict; unknown keys are ignored.

        Raises ``ValueError`` if a value is not a finite number, is
        negative, or is zero where the engine divides by it.
        """
        if not isinstance(d, dict):
            raise ValueError(f"camera settings must be a mapping, got {type(d).__name__}")
        values = {}
        for name, key in _PROJECT_KEYS.items():
            if key not in d:
                continue
            raw = d[key]
            if isinstance(raw, str):
                raise ValueError(f"{key} must be a number, got {raw!r}")
            try:
                value = float(raw)
            except TypeError as exc:
                raise ValueError(f"{key} must be a number, got {raw!r}") from exc
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{key} must be a finite non-negative number, got {raw!r}")
            if value == 0 and name in _POSITIVE_FIELDS:
                raise ValueError(f"{key} must be positive")
            values[name] = value
        return CameraSettings(**values)


# Field name → project file key
_PROJECT_KEYS = {
    "smoothing_factor": "smoothingFactor",
    "dead_zone": "deadZone",
    "smoothing_window": "smoothingWindow",
    "pan_smoothing": "panSmoothing",
    "reference_frame_interval": "referenceFrameInterval",
    "seek_threshold": "seekThreshold",
    "cursor_release": "cursorRelease",
    "convergence_power": "convergencePower",
}

# Divisors and exponents the engine needs strictly above zero
_POSITIVE_FIELDS = frozenset({"smoothing_window", "reference_frame_interval", "convergence_power"})


DEFAULT_SETTINGS = CameraSettings()
