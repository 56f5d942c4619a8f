"""Tests for app.smoothing — EMA cursor smoothing with dead zone."""

import pytest

from app.models import Sample
from app.smoothing import DEAD_ZONE_DAMPING, smoothed_position
from conftest import constant_track


class TestSmoothedPosition:
    def test_empty_track(self) -> None:
        assert smoothed_position([], 1.0) is None

    def test_before_first_sample(self) -> None:
        samples = [Sample(timestamp=1.0, x=10.0, y=10.0)]
        assert smoothed_position(samples, 0.5) is None

    def test_single_sample(self) -> None:
        samples = [Sample(timestamp=0.0, x=10.0, y=20.0)]
        assert smoothed_position(samples, 3.0) == pytest.approx((10.0, 20.0))

    def test_constant_stream_is_fixed_point(self) -> None:
        samples = constant_track(640.0, 360.0, duration=2.0)
        for t in (0.0, 0.33, 1.0, 1.51, 2.0, 5.0):
            assert smoothed_position(samples, t) == pytest.approx((640.0, 360.0))

    def test_large_move_uses_full_factor(self) -> None:
        samples = [
            Sample(timestamp=0.0, x=100.0, y=100.0),
            Sample(timestamp=1 / 60, x=200.0, y=100.0),
        ]
        pos = smoothed_position(samples, 1 / 60, smoothing_factor=0.2, dead_zone=5.0)
        assert pos == pytest.approx((120.0, 100.0))

    def test_jitter_inside_dead_zone_is_damped(self) -> None:
        samples = [
            Sample(timestamp=0.0, x=100.0, y=100.0),
            Sample(timestamp=1 / 60, x=102.0, y=100.0),
        ]
        pos = smoothed_position(samples, 1 / 60, smoothing_factor=0.2, dead_zone=5.0)
        assert pos == pytest.approx((100.0 + 2.0 * 0.2 * DEAD_ZONE_DAMPING, 100.0))

    def test_subframe_interpolation(self) -> None:
        samples = [
            Sample(timestamp=0.0, x=0.0, y=0.0),
            Sample(timestamp=1.0, x=100.0, y=50.0),
        ]
        # Halfway to the next sample: half of one 0.2 step toward it
        pos = smoothed_position(samples, 0.5, smoothing_factor=0.2)
        assert pos == pytest.approx((10.0, 5.0))

    def test_duplicate_timestamps_resolve_to_latest(self) -> None:
        samples = [
            Sample(timestamp=0.0, x=0.0, y=0.0),
            Sample(timestamp=0.0, x=50.0, y=0.0),
        ]
        # The warm-up anchor is the last sample at the window start, here the duplicate
        pos = smoothed_position(samples, 0.0, smoothing_factor=0.2)
        assert pos == pytest.approx((50.0, 0.0))

    def test_window_limits_history(self) -> None:
        """Samples older than the window no longer pull the average."""
        samples = [Sample(timestamp=0.0, x=0.0, y=0.0)] + [
            Sample(timestamp=1.0 + i / 60, x=800.0, y=0.0) for i in range(60)
        ]
        pos = smoothed_position(samples, 1.9, window=0.3)
        assert pos == pytest.approx((800.0, 0.0))

    def test_jump_approaches_monotonically(self, jump_track: list[Sample]) -> None:
        """After a jump the output climbs toward the target and never overshoots."""
        prev = smoothed_position(jump_track, 0.98)[0]
        assert prev == pytest.approx(500.0)
        for i in range(1, 121):
            t = 0.98 + i / 120.0
            x = smoothed_position(jump_track, t)[0]
            assert x >= prev - 1e-9, f"moved backwards at t={t}"
            assert x <= 900.0 + 1e-9, f"overshoot at t={t}"
            prev = x
        assert prev == pytest.approx(900.0)

    def test_causal(self) -> None:
        """Samples more than one step past t do not affect the result."""
        base = [Sample(timestamp=i / 60, x=100.0 + i, y=0.0) for i in range(30)]
        extended = base + [Sample(timestamp=1.0 + i, x=5000.0, y=5000.0) for i in range(5)]
        t = 10 / 60 + 0.001
        assert smoothed_position(base, t) == smoothed_position(extended, t)
