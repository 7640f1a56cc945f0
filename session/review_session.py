"""
Review session: the state one analyst works on.

Owns what a UI would otherwise keep as loose globals:
- the loaded force series and its cursor
- the loaded video surface and its frame navigator
- the 'exporting' flag gating re-entrant video exports

Core functions never read this object; the session passes values in.
"""

import logging
from pathlib import Path
from typing import Optional

from series_io.parser import Series, parse_series, load_series
from timeline.mapper import CutPoint, resolve_cut
from timeline.navigator import FrameNavigator, SeriesCursor
from trim_export.media import FrameRecorder, export_media_from
from trim_export.tabular import export_series_from
from utils.config_loader import TrimSettings
from utils.video_io import VideoSurface

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    One trial under review.

    Usage:
        session = ReviewSession(TrimSettings(), DirectorySink('out'))
        session.load_series_file('force.csv')
        session.load_video('trial.mp4')
        session.seek_series_time(2.0)
        session.export_series()
        await session.export_video()
    """

    def __init__(self, settings: Optional[TrimSettings] = None, sink=None):
        self.settings = settings or TrimSettings()
        self.sink = sink

        self.series = Series.empty()
        self.cursor = SeriesCursor(self.series)

        self.video = None
        self.navigator = FrameNavigator(frame_rate=self.settings.frame_rate)

        self.is_exporting = False

    # ---- loading ----
    def load_series_text(self, raw_text: str) -> Series:
        """Replace the series with one parsed from raw CSV text."""
        self.series = parse_series(raw_text, self.settings.layout)
        self.cursor.reset(self.series)
        return self.series

    def load_series_file(self, path) -> Series:
        self.series = load_series(path, self.settings.layout)
        self.cursor.reset(self.series)
        return self.series

    def load_video(self, path_or_surface):
        """
        Load a video (path or ready media surface), replacing any previous one.

        Total frames are recomputed from the new duration.
        """
        if self.video is not None and hasattr(self.video, 'release'):
            self.video.release()

        if isinstance(path_or_surface, (str, Path)):
            self.video = VideoSurface(path_or_surface)
        else:
            self.video = path_or_surface

        self.navigator = FrameNavigator(self.video, frame_rate=self.settings.frame_rate)
        return self.video

    def close(self):
        if self.video is not None and hasattr(self.video, 'release'):
            self.video.release()
        self.video = None

    # ---- navigation ----
    def step_frame(self, delta: int) -> Optional[int]:
        return self.navigator.step(delta)

    def seek_frame(self, frame: int) -> int:
        return self.navigator.seek_frame(frame)

    def seek_series_index(self, index: int) -> int:
        return self.cursor.set_index(index)

    def seek_series_time(self, time_sec: float) -> int:
        return self.cursor.seek_time(time_sec)

    def resolve_cut(self, time_sec: float) -> CutPoint:
        return resolve_cut(self.series, time_sec, self.settings.frame_rate)

    # ---- export ----
    def export_series(self, current_time: Optional[float] = None) -> bytes:
        """
        Export the force series from current_time (default: the cursor time).
        """
        if current_time is None:
            current_time = self.cursor.current_time

        return export_series_from(
            self.series,
            current_time,
            sink=self.sink,
            filename=self.settings.data_filename
        )

    async def export_video(self, position_time: Optional[float] = None) -> Optional[bytes]:
        """
        Export the video from position_time (default: the navigator time) to the end.

        Returns None when no video is loaded, an export is already running,
        or the export failed.
        """
        if self.video is None:
            logger.warning("No video loaded, nothing to export")
            return None

        if self.is_exporting:
            logger.debug("Video export already in progress, request ignored")
            return None

        if position_time is None:
            position_time = self.navigator.current_time

        fps = getattr(self.video, 'native_fps', 0) or self.settings.frame_rate
        codec = self.settings.video_codec

        def make_recorder(stream):
            return FrameRecorder(stream, fps=fps, codec=codec)

        self.is_exporting = True
        try:
            return await export_media_from(
                self.video,
                position_time,
                sink=self.sink,
                recorder_factory=make_recorder,
                filename=self.settings.video_filename
            )
        finally:
            self.is_exporting = False
