"""Zoom engine — computes the camera transform for any query time.

A zoom region plays in three phases: zoom-in, hold and zoom-out.
:func:`select_phase` decides which phase a time falls in;
:func:`calculate_zoom_transform` blends scale and pan for that phase
using the cursor smoother and the bounded pan solver.

The only state carried between calls is :class:`EngineState` (pan
shown last time and when).  It is passed in and a new one is returned,
so each playback or export run owns its own history.  :class:`ZoomSession`
wraps that threading for callers that own one session.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple, Union

from .config import DEFAULT_SETTINGS, CameraSettings
from .easing import DEFAULT_TABLE, EasingTable, clamp01, lerp
from .models import EngineState, Geometry, Sample, TransformResult, ZoomRegion, format_origin
from .pan import bounded_pan
from .smoothing import smoothed_position

logger = logging.getLogger(__name__)


# ── Phases ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Inactive:
    pass


@dataclass(frozen=True)
class ZoomIn:
    progress: float  # raw 0-1, not eased


@dataclass(frozen=True)
class Hold:
    pass


@dataclass(frozen=True)
class ZoomOut:
    progress: float


Phase = Union[Inactive, ZoomIn, Hold, ZoomOut]


def find_active_region(
    regions: Mapping[str, ZoomRegion], t: float
) -> Optional[ZoomRegion]:
    """First region (in iteration order) whose ``[start, end)`` contains *t*.

    Regions are expected not to overlap; if they do, the first match wins.
    """
    for region in regions.values():
        if region.contains(t):
            return region
    return None


def select_phase(region: Optional[ZoomRegion], t: float) -> Phase:
    """Classify *t* against *region*'s zoom-in / hold / zoom-out windows."""
    if region is None or t < region.start_time:
        return Inactive()
    if t < region.zoom_in_end:
        return ZoomIn((t - region.start_time) / region.transition_duration)
    if t < region.zoom_out_start:
        return Hold()
    if t <= region.end_time:
        if region.transition_duration <= 0:
            return ZoomOut(1.0)
        return ZoomOut((t - region.zoom_out_start) / region.transition_duration)
    return Inactive()


# ── Blending helpers ────────────────────────────────────────────────


def frame_alpha(dt: float, settings: CameraSettings = DEFAULT_SETTINGS) -> float:
    """Pan follow rate for *dt* seconds since the previous call.

    Scaled by elapsed time rather than call count, so irregular call
    intervals move the camera at the same speed.  Zero for ``dt <= 0``.
    """
    if dt <= 0:
        return 0.0
    return clamp01(dt / settings.reference_frame_interval * settings.pan_smoothing)


def convergence_alpha(
    base_alpha: float, eased: float, settings: CameraSettings = DEFAULT_SETTINGS
) -> float:
    """Blend *base_alpha* toward 1 as zoom-out completes (``eased ** power``)."""
    return lerp(clamp01(base_alpha), 1.0, eased ** settings.convergence_power)


def cursor_influence(eased: float, settings: CameraSettings = DEFAULT_SETTINGS) -> float:
    """How strongly the cursor still steers the pan during zoom-out."""
    release = settings.cursor_release
    if release <= 0 or eased > release:
        return 0.0
    return 1.0 - eased / release


def _cursor_pan(
    t: float,
    samples: Sequence[Sample],
    origin: Tuple[float, float],
    zoom_level: float,
    recording: Geometry,
    frame: Geometry,
    settings: CameraSettings,
) -> Tuple[float, float]:
    pos = smoothed_position(
        samples,
        t,
        smoothing_factor=settings.smoothing_factor,
        dead_zone=settings.dead_zone,
        window=settings.smoothing_window,
    )
    return bounded_pan(pos, origin, zoom_level, recording, frame)


# ── Engine ──────────────────────────────────────────────────────────


def calculate_zoom_transform(
    t: float,
    regions: Mapping[str, ZoomRegion],
    samples: Sequence[Sample],
    recording: Geometry,
    frame: Geometry,
    state: Optional[EngineState] = None,
    settings: CameraSettings = DEFAULT_SETTINGS,
    easings: EasingTable = DEFAULT_TABLE,
) -> Tuple[TransformResult, EngineState]:
    """Camera transform at time *t* plus the updated session state.

    Pure given its arguments: the same inputs and *state* always give
    the same result.  Degenerate inputs (no samples, zero-area
    geometry, unknown easing) fall back to safe defaults.
    """
    if state is None:
        state = EngineState.initial()

    region = find_active_region(regions, t)
    phase = select_phase(region, t)
    if region is None or isinstance(phase, Inactive):
        return TransformResult.identity(), EngineState(
            state.previous_pan_x, state.previous_pan_y, t
        )

    prev_x, prev_y = state.previous_pan_x, state.previous_pan_y
    dt = t - state.last_query_time
    if abs(dt) > settings.seek_threshold:
        logger.debug("Seek detected (%.3fs → %.3fs), resetting pan", state.last_query_time, t)
        prev_x, prev_y = 0.0, 0.0

    origin = (region.target_x + 0.5, region.target_y + 0.5)
    transform_origin = format_origin(*origin)
    tracking = region.is_auto and len(samples) > 0 and recording.is_valid
    easing = region.easing

    if isinstance(phase, ZoomIn):
        e = easings.ease(easing, phase.progress)
        scale = lerp(1.0, region.zoom_level, e)
        # Fixed destination: cursor where zoom-in ends, so the glide is monotonic
        if tracking:
            target = _cursor_pan(
                region.zoom_in_end, samples, origin, region.zoom_level, recording, frame, settings
            )
        else:
            target = (0.0, 0.0)
        tx = lerp(0.0, target[0], e)
        ty = lerp(0.0, target[1], e)

    elif isinstance(phase, Hold):
        scale = region.zoom_level
        if tracking:
            target = _cursor_pan(t, samples, origin, region.zoom_level, recording, frame, settings)
        else:
            target = (0.0, 0.0)
        alpha = frame_alpha(dt, settings)
        tx = lerp(prev_x, target[0], alpha)
        ty = lerp(prev_y, target[1], alpha)

    else:
        e = easings.ease(easing, phase.progress)
        scale = lerp(region.zoom_level, 1.0, e)
        if tracking:
            live = _cursor_pan(t, samples, origin, scale, recording, frame, settings)
            influence = cursor_influence(e, settings)
            target = (live[0] * influence, live[1] * influence)
        else:
            # Fixed mode pivots on the target point; its stationary pan is zero
            target = (0.0, 0.0)
        alpha = convergence_alpha(frame_alpha(dt, settings), e, settings)
        tx = lerp(prev_x, target[0], alpha)
        ty = lerp(prev_y, target[1], alpha)

    result = TransformResult(scale, tx, ty, transform_origin)
    return result, EngineState(tx, ty, t)


def zoom_presence(
    t: float,
    regions: Mapping[str, ZoomRegion],
    easings: EasingTable = DEFAULT_TABLE,
) -> float:
    """How far the camera is "zoomed in" at *t*, from 0 (none) to 1 (hold).

    Follows the region's easing, so overlay layers that grow or shrink
    with the zoom (e.g. a webcam bubble) stay in step with the camera.
    """
    region = find_active_region(regions, t)
    phase = select_phase(region, t)
    if isinstance(phase, ZoomIn):
        return easings.ease(region.easing, phase.progress)
    if isinstance(phase, Hold):
        return 1.0
    if isinstance(phase, ZoomOut):
        return 1.0 - easings.ease(region.easing, phase.progress)
    return 0.0


class ZoomSession:
    """One playback or export run of the camera.

    Owns the :class:`EngineState` for that run and threads it through
    :func:`calculate_zoom_transform`.  A live preview and an export must
    each use their own session.
    """

    def __init__(
        self,
        regions: Mapping[str, ZoomRegion],
        samples: Sequence[Sample],
        recording: Geometry,
        settings: CameraSettings = DEFAULT_SETTINGS,
        easings: EasingTable = DEFAULT_TABLE,
    ) -> None:
        self.regions = regions
        self.samples = samples
        self.recording = recording
        self.settings = settings
        self.easings = easings
        self.state: EngineState = EngineState.initial()
        self.current: TransformResult = TransformResult.identity()

    def reset(self) -> None:
        """Forget the pan history, e.g. before restarting playback."""
        self.state = EngineState.initial()
        self.current = TransformResult.identity()

    def compute_at(self, t: float, frame: Geometry) -> TransformResult:
        """Transform at *t* for the given frame geometry; advances the session."""
        self.current, self.state = calculate_zoom_transform(
            t,
            self.regions,
            self.samples,
            self.recording,
            frame,
            self.state,
            self.settings,
            self.easings,
        )
        return self.current
