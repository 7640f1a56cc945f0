"""
Unit tests for timeline mapping and navigation.

Tests cover:
- Time <-> frame conversion
- Lower-bound series lookup
- Frame stepping and slider clamping
- Series cursor behaviour
"""

import pytest # pyright: ignore[reportMissingImports]
import numpy as np
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from series_io.parser import Series, parse_series
from timeline.mapper import (
    frame_to_time,
    time_to_frame,
    time_to_series_index,
    total_frames_for_duration,
    resolve_cut
)
from timeline.navigator import (
    clamp_frame,
    move_frame,
    FrameNavigator,
    SeriesCursor
)


def _series(times):
    return Series(time=times, channel_a=np.zeros(len(times)), channel_b=np.zeros(len(times)))


class RecordingSurface:
    """Minimal media surface that records seeks."""

    def __init__(self, duration=3.0):
        self.duration = duration
        self.current_time = 0.0
        self.seeks = []
        self._metadata_callbacks = []

    def on_metadata_loaded(self, callback):
        self._metadata_callbacks.append(callback)
        callback()

    def on_ended(self, callback):
        pass

    def __setattr__(self, name, value):
        if name == 'current_time' and 'seeks' in self.__dict__:
            self.seeks.append(value)
        super().__setattr__(name, value)


class TestTimeConversion:
    """Test time <-> frame conversion functions."""

    def test_frame_to_time_basic(self):
        assert frame_to_time(0) == 0.0
        assert frame_to_time(30) == 1.0
        assert frame_to_time(45, 30.0) == 1.5

    def test_time_to_frame_uses_floor(self):
        assert time_to_frame(0.0) == 0
        assert time_to_frame(1.0) == 30
        assert time_to_frame(1.0 / 30 * 0.99) == 0
        assert time_to_frame(2.99 / 30) == 2

    def test_roundtrip_is_exact(self):
        """Every frame survives frame -> time -> frame."""
        for fps in (24.0, 25.0, 29.97, 30.0, 60.0):
            for frame in range(0, 5000):
                assert time_to_frame(frame_to_time(frame, fps), fps) == frame

    def test_total_frames(self):
        assert total_frames_for_duration(3.0) == 90
        assert total_frames_for_duration(3.02) == 90
        assert total_frames_for_duration(0.0) == 0
        assert total_frames_for_duration(float('nan')) == 0


class TestSeriesIndex:
    """Test lower-bound lookup into the force series."""

    def test_lower_bound(self):
        series = _series([0.0, 1.0, 2.0])

        assert time_to_series_index(series, -1.0) == 0
        assert time_to_series_index(series, 0.0) == 0
        assert time_to_series_index(series, 0.5) == 1
        assert time_to_series_index(series, 1.0) == 1
        assert time_to_series_index(series, 2.0) == 2

    def test_past_end_returns_length(self):
        series = _series([0.0, 1.0, 2.0])
        assert time_to_series_index(series, 2.5) == 3

    def test_ties_resolve_to_first_row(self):
        series = _series([0.0, 1.0, 1.0, 1.0, 2.0])
        assert time_to_series_index(series, 1.0) == 1

    def test_empty_series(self):
        assert time_to_series_index(Series.empty(), 5.0) == 0

    def test_monotonic(self):
        rng = np.random.default_rng(0)
        series = _series(np.sort(rng.uniform(0, 10, 200)))
        queries = np.sort(rng.uniform(-1, 11, 300))

        indices = [time_to_series_index(series, t) for t in queries]

        assert all(a <= b for a, b in zip(indices, indices[1:]))

    def test_resolve_cut(self):
        series = parse_series("h\n0,,,1\n1,,,2\n2,,,3")
        cut = resolve_cut(series, 1.0, 30.0)

        assert cut.time == 1.0
        assert cut.frame == 30
        assert cut.series_index == 1


class TestMoveFrame:
    """Test frame stepping policy."""

    def test_step_inside_range(self):
        assert move_frame(10, 90, 1) == 11
        assert move_frame(10, 90, -1) == 9

    def test_step_past_end_rejected(self):
        assert move_frame(89, 90, 1) is None

    def test_step_before_start_rejected(self):
        assert move_frame(0, 90, -1) is None

    def test_large_deltas_rejected(self):
        assert move_frame(45, 90, 1000) is None
        assert move_frame(45, 90, -1000) is None

    def test_no_frames(self):
        assert move_frame(0, 0, 1) is None
        assert move_frame(0, 0, 0) is None

    def test_never_leaves_range(self):
        total = 90
        for start in range(total):
            for delta in (-200, -90, -1, 0, 1, 89, 200):
                result = move_frame(start, total, delta)
                if result is not None:
                    assert 0 <= result < total


class TestClampFrame:
    """Test slider clamping policy."""

    def test_upper_bound_inclusive(self):
        assert clamp_frame(90, 90) == 90
        assert clamp_frame(500, 90) == 90

    def test_lower_bound(self):
        assert clamp_frame(-5, 90) == 0

    def test_no_media(self):
        assert clamp_frame(10, 0) == 0


class TestFrameNavigator:
    """Test the video cursor."""

    def test_metadata_sets_total_frames(self):
        surface = RecordingSurface(duration=3.0)
        navigator = FrameNavigator(surface, frame_rate=30.0)

        assert navigator.total_frames == 90
        assert navigator.current_frame == 0

    def test_step_seeks_surface(self):
        surface = RecordingSurface(duration=3.0)
        navigator = FrameNavigator(surface, frame_rate=30.0)

        assert navigator.step(15) == 15
        assert surface.current_time == 0.5
        assert surface.seeks == [0.5]

    def test_rejected_step_is_noop(self):
        surface = RecordingSurface(duration=3.0)
        navigator = FrameNavigator(surface, frame_rate=30.0)
        navigator.seek_frame(89)
        surface.seeks.clear()

        assert navigator.step(1) is None
        assert navigator.current_frame == 89
        assert surface.seeks == []

        navigator.seek_frame(0)
        surface.seeks.clear()
        assert navigator.step(-1) is None
        assert navigator.current_frame == 0
        assert surface.seeks == []

    def test_slider_reaches_total(self):
        navigator = FrameNavigator(RecordingSurface(duration=3.0), frame_rate=30.0)

        assert navigator.seek_frame(1000) == 90
        assert navigator.current_time == 3.0

    def test_without_surface(self):
        navigator = FrameNavigator(frame_rate=30.0)
        navigator.load_metadata(2.0)

        assert navigator.total_frames == 60
        assert navigator.step(1) == 1

    def test_missing_duration(self):
        navigator = FrameNavigator(frame_rate=30.0)

        assert navigator.load_metadata(None) == 0
        assert navigator.step(1) is None


class TestSeriesCursor:
    """Test the force-series cursor."""

    def test_empty_series(self):
        cursor = SeriesCursor()

        assert cursor.current_time == 0.0
        assert cursor.set_index(10) == 0

    def test_set_index_clamps(self):
        cursor = SeriesCursor(_series([0.0, 0.5, 1.0]))

        assert cursor.set_index(5) == 2
        assert cursor.current_time == 1.0
        assert cursor.set_index(-3) == 0
        assert cursor.current_time == 0.0

    def test_seek_time(self):
        cursor = SeriesCursor(_series([0.0, 0.5, 1.0]))

        assert cursor.seek_time(0.4) == 1
        assert cursor.current_time == 0.5
        assert cursor.seek_time(9.0) == 2

    def test_reset(self):
        cursor = SeriesCursor(_series([0.0, 0.5, 1.0]))
        cursor.set_index(2)
        cursor.reset(_series([3.0, 4.0]))

        assert cursor.current_index == 0
        assert cursor.current_time == 3.0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
