"""Offline export sampling — the camera transform at fixed time steps.

The exporter runs its own :class:`ZoomSession`, independent of any
preview session, and walks the timeline at ``1 / fps`` steps so the
exported camera path is reproducible run to run.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional, Sequence

import numpy as np

from .config import DEFAULT_SETTINGS, CameraSettings
from .models import DEFAULT_FPS, Geometry, Sample, ZoomRegion
from .zoom_engine import ZoomSession

logger = logging.getLogger(__name__)


def frame_times(fps: float, start: float, end: float) -> np.ndarray:
    """Timestamps of every output frame in ``[start, end]`` at *fps*.

    Computed as ``start + i / fps`` rather than by accumulation so long
    exports do not drift.
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    if end < start:
        return np.empty(0, dtype=np.float64)
    count = int(np.floor((end - start) * fps + 1e-9)) + 1
    return start + np.arange(count, dtype=np.float64) / fps


def timeline_end(regions: Mapping[str, ZoomRegion], samples: Sequence[Sample]) -> float:
    """Latest time anything happens: last region end or last sample."""
    end = 0.0
    if regions:
        end = max(r.end_time for r in regions.values())
    if samples:
        end = max(end, samples[-1].timestamp)
    return end


@dataclass
class TransformTrack:
    """Per-frame camera transforms, one array entry per output frame."""
    times: np.ndarray
    scale: np.ndarray
    translate_x: np.ndarray
    translate_y: np.ndarray
    origins: List[str]

    def __len__(self) -> int:
        return len(self.times)

    def to_rows(self) -> Iterator[dict]:
        """Yield one plain dict per frame (JSON / CSV friendly)."""
        for i in range(len(self.times)):
            yield {
                "time": float(self.times[i]),
                "scale": float(self.scale[i]),
                "translateX": float(self.translate_x[i]),
                "translateY": float(self.translate_y[i]),
                "transformOrigin": self.origins[i],
            }


def sample_transforms(
    regions: Mapping[str, ZoomRegion],
    samples: Sequence[Sample],
    recording: Geometry,
    frame: Geometry,
    fps: float = DEFAULT_FPS,
    start: float = 0.0,
    end: Optional[float] = None,
    settings: CameraSettings = DEFAULT_SETTINGS,
) -> TransformTrack:
    """Evaluate the camera at every frame time between *start* and *end*.

    *end* defaults to :func:`timeline_end`.
    """
    if end is None:
        end = timeline_end(regions, samples)
    times = frame_times(fps, start, end)
    n = len(times)
    logger.info("Sampling %d frames at %g fps (%.3fs → %.3fs)", n, fps, start, end)

    session = ZoomSession(regions, samples, recording, settings)
    scale = np.ones(n, dtype=np.float64)
    tx = np.zeros(n, dtype=np.float64)
    ty = np.zeros(n, dtype=np.float64)
    origins: List[str] = []

    for i, t in enumerate(times):
        result = session.compute_at(float(t), frame)
        scale[i] = result.scale
        tx[i] = result.translate_x
        ty[i] = result.translate_y
        origins.append(result.transform_origin)

    return TransformTrack(times=times, scale=scale, translate_x=tx, translate_y=ty, origins=origins)
