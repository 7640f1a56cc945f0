"""
Position tracking for both modalities.

- FrameNavigator: video cursor, frame steps and slider seeks
- SeriesCursor: force-series cursor over row indices

The two cursors are independent; neither moves the other.
Out-of-range moves are silent no-ops, never errors.
"""

import logging
from typing import Optional

from series_io.parser import Series
from .mapper import (
    DEFAULT_FRAME_RATE,
    frame_to_time,
    time_to_series_index,
    total_frames_for_duration
)

logger = logging.getLogger(__name__)


def clamp_frame(frame: int, total_frames: int) -> int:
    """
    Clamp a slider position to [0, total_frames].

    The upper bound is inclusive: the slider may reach total_frames,
    one past the last playable frame.
    """
    return max(0, min(int(frame), max(0, total_frames)))


def move_frame(current_frame: int, total_frames: int, delta: int) -> Optional[int]:
    """
    Apply a frame step if the result stays playable.

    Args:
        current_frame: Current frame index
        total_frames: Number of frames in the media
        delta: Step size (negative steps backwards)

    Returns:
        New frame in [0, total_frames), or None when the step is rejected
    """
    new_frame = current_frame + delta
    if 0 <= new_frame < total_frames:
        return new_frame
    return None


class FrameNavigator:
    """
    Video cursor bound to a media surface.

    Usage:
        navigator = FrameNavigator(surface, frame_rate=30.0)
        navigator.step(1)
        navigator.seek_frame(120)
    """

    def __init__(self, surface=None, frame_rate: float = DEFAULT_FRAME_RATE):
        """
        Initialize navigator.

        Args:
            surface: Media surface receiving seeks (None = position only)
            frame_rate: Assumed frames per second of the media
        """
        self.surface = surface
        self.frame_rate = frame_rate
        self.current_frame = 0
        self.total_frames = 0

        if surface is not None:
            surface.on_metadata_loaded(lambda: self.load_metadata(surface.duration))

    @property
    def current_time(self) -> float:
        return frame_to_time(self.current_frame, self.frame_rate)

    def load_metadata(self, duration: float) -> int:
        """Derive total frames from a media duration and rewind."""
        self.total_frames = total_frames_for_duration(duration, self.frame_rate)
        self.current_frame = 0
        logger.info(
            f"Media timeline: {duration}s → {self.total_frames} frames "
            f"@ {self.frame_rate:g} fps"
        )
        return self.total_frames

    def step(self, delta: int) -> Optional[int]:
        """
        Move by delta frames.

        Returns:
            New frame, or None when the move was rejected
        """
        new_frame = move_frame(self.current_frame, self.total_frames, delta)
        if new_frame is None:
            logger.debug(
                f"Frame step {delta:+d} from {self.current_frame} rejected "
                f"(total {self.total_frames})"
            )
            return None

        self.current_frame = new_frame
        self._seek()
        return new_frame

    def seek_frame(self, frame: int) -> int:
        """Absolute positioning (slider), clamped to [0, total_frames]."""
        self.current_frame = clamp_frame(frame, self.total_frames)
        self._seek()
        return self.current_frame

    def _seek(self):
        if self.surface is not None:
            self.surface.current_time = self.current_time


class SeriesCursor:
    """
    Force-series cursor over row indices [0, len - 1].

    current_time is the timestamp under the cursor (0.0 for an empty series).
    """

    def __init__(self, series: Optional[Series] = None):
        self.series = series if series is not None else Series.empty()
        self.current_index = 0

    def reset(self, series: Series):
        self.series = series
        self.current_index = 0

    @property
    def last_index(self) -> int:
        return max(0, len(self.series) - 1)

    @property
    def current_time(self) -> float:
        if self.series.is_empty:
            return 0.0
        return float(self.series.time[self.current_index])

    def set_index(self, index: int) -> int:
        self.current_index = max(0, min(int(index), self.last_index))
        return self.current_index

    def seek_time(self, time_sec: float) -> int:
        """Move to the first row at or after time_sec (last row if none)."""
        return self.set_index(time_to_series_index(self.series, time_sec))
