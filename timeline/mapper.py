"""
Timeline index mapping: time ↔ video frame ↔ series row.

Engineering challenge:
- Video is frame-quantized at a fixed assumed rate
- Force samples are row-indexed at possibly irregular timestamps
- A single cut point must translate consistently into both

The frame rate is an assumption, not a measurement: video not encoded at
the configured rate drifts against the force series over time.
"""

import logging
from dataclasses import dataclass

import numpy as np

from series_io.parser import Series

logger = logging.getLogger(__name__)

DEFAULT_FRAME_RATE = 30.0

# Products this close to an integer are treated as that integer
_FRAME_SNAP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class CutPoint:
    """
    A cut point resolved in both modalities.

    Attributes:
        time: Cut time in seconds (media export boundary)
        frame: Video frame containing the cut time
        series_index: First series row kept by the tabular export
    """
    time: float
    frame: int
    series_index: int


def frame_to_time(frame_idx: int, frame_rate: float = DEFAULT_FRAME_RATE) -> float:
    """
    Convert frame index to time in seconds.

    Args:
        frame_idx: Frame index (0-based)
        frame_rate: Frames per second

    Returns:
        Time in seconds
    """
    return frame_idx / frame_rate


def time_to_frame(time_sec: float, frame_rate: float = DEFAULT_FRAME_RATE) -> int:
    """
    Convert time in seconds to the frame that contains it.

    Uses floor, so a time inside a frame maps to that frame's index.

    Args:
        time_sec: Time in seconds
        frame_rate: Frames per second

    Returns:
        Frame index (0-based)
    """
    position = time_sec * frame_rate
    nearest = np.round(position)
    if abs(position - nearest) <= _FRAME_SNAP_TOLERANCE:
        return int(nearest)
    return int(np.floor(position))


def time_to_series_index(series: Series, time_sec: float) -> int:
    """
    Lower-bound lookup: first row whose time is >= time_sec.

    Rows sharing the cut timestamp are all kept (the first equal row wins).
    The result does not rely on the series being sorted.

    Args:
        series: Parsed force series
        time_sec: Cut time in seconds

    Returns:
        Row index, or len(series) when every sample is earlier
    """
    if series.is_empty:
        return 0

    at_or_after = series.time >= time_sec
    if not at_or_after.any():
        return len(series)

    return int(np.argmax(at_or_after))


def total_frames_for_duration(
    duration_sec: float,
    frame_rate: float = DEFAULT_FRAME_RATE
) -> int:
    """
    Number of whole frames in a media duration.

    Args:
        duration_sec: Media duration in seconds
        frame_rate: Frames per second

    Returns:
        floor(duration * frame_rate), 0 for unusable durations
    """
    if duration_sec is None or not np.isfinite(duration_sec) or duration_sec <= 0:
        logger.warning(f"Unusable media duration: {duration_sec}")
        return 0

    return int(np.floor(duration_sec * frame_rate))


def resolve_cut(
    series: Series,
    time_sec: float,
    frame_rate: float = DEFAULT_FRAME_RATE
) -> CutPoint:
    """
    Resolve a cut time to its frame and series row.

    Args:
        series: Parsed force series
        time_sec: Cut time in seconds
        frame_rate: Frames per second

    Returns:
        CutPoint for both exporters
    """
    cut = CutPoint(
        time=float(time_sec),
        frame=time_to_frame(time_sec, frame_rate),
        series_index=time_to_series_index(series, time_sec)
    )

    logger.debug(
        f"Cut at {cut.time:.3f}s → frame {cut.frame}, "
        f"row {cut.series_index}/{len(series)}"
    )

    return cut
