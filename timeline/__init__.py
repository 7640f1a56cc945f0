"""
Timeline module: one cut point, two coordinate systems.

This module reconciles the frame-quantized video timeline with the
sample-indexed force series:
1. Converting between time, frame number and series row
2. Resolving a cut point to a boundary in each modality
3. Tracking cursor positions with silent bounds enforcement

Engineering approach:
- Pure conversion functions (easy to test, no hidden state)
- Fixed, configurable frame rate instead of per-file detection
- Named clamping policies instead of incidental bounds checks
"""

from .mapper import (
    DEFAULT_FRAME_RATE,
    CutPoint,
    frame_to_time,
    time_to_frame,
    time_to_series_index,
    total_frames_for_duration,
    resolve_cut
)
from .navigator import (
    clamp_frame,
    move_frame,
    FrameNavigator,
    SeriesCursor
)

__all__ = [
    'DEFAULT_FRAME_RATE',
    'CutPoint',
    'frame_to_time',
    'time_to_frame',
    'time_to_series_index',
    'total_frames_for_duration',
    'resolve_cut',
    'clamp_frame',
    'move_frame',
    'FrameNavigator',
    'SeriesCursor',
]
