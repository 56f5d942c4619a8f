"""Shared pytest fixtures for FollowCam tests."""

import pytest

from app.models import Geometry, Sample, ZoomRegion


# ── Geometry ────────────────────────────────────────────────────────

@pytest.fixture
def recording() -> Geometry:
    """A 1920×1080 recording."""
    return Geometry(1920, 1080)


@pytest.fixture
def frame() -> Geometry:
    """Frame content box the same size as the recording."""
    return Geometry(1920, 1080)


# ── Sample tracks ───────────────────────────────────────────────────

def constant_track(x: float, y: float, duration: float = 6.0, rate: float = 60.0) -> list[Sample]:
    """Cursor parked at (x, y), sampled at *rate* Hz for *duration* seconds."""
    return [Sample(timestamp=i / rate, x=x, y=y) for i in range(int(duration * rate) + 1)]


@pytest.fixture
def far_cursor_track() -> list[Sample]:
    """Cursor parked near the bottom-right corner for 6s."""
    return constant_track(1900.0, 1060.0)


@pytest.fixture
def jump_track() -> list[Sample]:
    """Cursor at x=500 until 1s, then jumps to x=900 (60 Hz)."""
    return [
        Sample(timestamp=i / 60.0, x=500.0 if i < 60 else 900.0, y=300.0)
        for i in range(121)
    ]


@pytest.fixture
def wandering_track() -> list[Sample]:
    """Cursor sweeping left → right across the screen over 6s."""
    return [
        Sample(timestamp=i / 60.0, x=100.0 + i * 4.5, y=200.0 + i * 1.5)
        for i in range(361)
    ]


# ── Zoom regions ────────────────────────────────────────────────────

@pytest.fixture
def fixed_region() -> ZoomRegion:
    """Fixed-mode region: 1s → 4s, 0.5s transitions, 2× zoom at centre."""
    return ZoomRegion(
        id="fixed",
        start_time=1.0,
        duration=3.0,
        zoom_level=2.0,
        target_x=0.0,
        target_y=0.0,
        mode="fixed",
        easing="Balanced",
        transition_duration=0.5,
    )


@pytest.fixture
def auto_region() -> ZoomRegion:
    """Auto-mode twin of ``fixed_region``."""
    return ZoomRegion(
        id="auto",
        start_time=1.0,
        duration=3.0,
        zoom_level=2.0,
        mode="auto",
        easing="Balanced",
        transition_duration=0.5,
    )
