"""
Trimmed video export by playback capture.

Algorithm:
1. Capture the surface's live frame stream
2. Start a recorder on the stream
3. Seek to the cut time and play
4. Stop the recorder when the surface reports the end of the source

The result always runs from the cut point to the end of the video.

Failure handling:
- Capture/recorder setup errors: logged, nothing emitted, returns None
- Playback errors after recording started: logged, the partial
  recording is still emitted
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

import cv2
import numpy as np

from timeline.mapper import DEFAULT_FRAME_RATE
from utils.video_io import FrameStream

logger = logging.getLogger(__name__)

VIDEO_FILENAME = 'trimmed-video.mp4'
VIDEO_MIME_TYPE = 'video/mp4'


class FrameRecorder:
    """
    Records a frame stream into an in-memory MP4 buffer.

    Frames go through an OpenCV VideoWriter backed by a temporary file;
    stop() returns the file's bytes and removes it. The container really
    is MP4, matching VIDEO_MIME_TYPE.
    """

    def __init__(
        self,
        stream: FrameStream,
        fps: float = DEFAULT_FRAME_RATE,
        codec: str = 'mp4v'
    ):
        """
        Initialize recorder.

        Args:
            stream: Frame stream to record
            fps: Output frames per second
            codec: Video codec fourcc code
        """
        self.stream = stream
        self.fps = fps
        self.codec = codec
        self.frames_written = 0
        self.recording = False

        self._writer: Optional[cv2.VideoWriter] = None
        self._path: Optional[Path] = None

    def start(self):
        fd, path = tempfile.mkstemp(suffix='.mp4', prefix='trim_')
        os.close(fd)
        self._path = Path(path)
        self.frames_written = 0
        self.recording = True
        self.stream.subscribe(self._on_frame)
        logger.debug(f"Recording to {self._path} ({self.codec} @ {self.fps:g} fps)")

    def _on_frame(self, frame: np.ndarray):
        if not self.recording:
            return

        if self._writer is None:
            h, w = frame.shape[:2]
            fourcc = cv2.VideoWriter_fourcc(*self.codec)
            self._writer = cv2.VideoWriter(str(self._path), fourcc, self.fps, (w, h))
            if not self._writer.isOpened():
                raise RuntimeError(f"Failed to open video writer ({self.codec}, {w}x{h})")

        self._writer.write(frame)
        self.frames_written += 1

    def stop(self) -> bytes:
        """Stop recording and return the recorded buffer (empty if no frames)."""
        if not self.recording:
            return b''

        self.recording = False
        self.stream.unsubscribe(self._on_frame)

        try:
            if self._writer is not None:
                self._writer.release()
                self._writer = None
            data = self._path.read_bytes() if self.frames_written else b''
        finally:
            self._path.unlink(missing_ok=True)
            self._path = None

        logger.info(f"Recorded {self.frames_written} frames ({len(data)} bytes)")

        return data


RecorderFactory = Callable[[FrameStream], FrameRecorder]


async def export_media_from(
    surface,
    position_time: float,
    sink=None,
    recorder_factory: Optional[RecorderFactory] = None,
    filename: str = VIDEO_FILENAME
) -> Optional[bytes]:
    """
    Record the video from position_time to its end.

    Args:
        surface: Media surface (duration, current_time, on_ended,
            off_ended, capture_stream, play)
        position_time: Cut time in seconds
        sink: Optional blob sink receiving the buffer
        recorder_factory: Builds a recorder for a frame stream
            (default: FrameRecorder at the surface's native fps)
        filename: Name handed to the sink

    Returns:
        Recorded buffer, or None when nothing was emitted
    """
    if recorder_factory is None:
        fps = getattr(surface, 'native_fps', 0) or DEFAULT_FRAME_RATE

        def recorder_factory(stream):
            return FrameRecorder(stream, fps=fps)

    logger.info(
        f"Exporting video from {position_time:.3f}s "
        f"to end ({surface.duration:.3f}s)"
    )

    try:
        stream = surface.capture_stream()
        recorder = recorder_factory(stream)
        recorder.start()
    except Exception as e:
        logger.error(f"Error exporting video: {e}")
        return None

    result = {}

    def _on_ended():
        if 'data' not in result:
            result['data'] = recorder.stop()

    try:
        surface.on_ended(_on_ended)
        surface.current_time = position_time
        await surface.play()
    except Exception as e:
        logger.error(f"Error exporting video: {e}")
    finally:
        surface.off_ended(_on_ended)

    try:
        # Fallback stop when playback failed before reaching the end
        _on_ended()
    except Exception as e:
        logger.error(f"Error finalizing video export: {e}")
        return None

    data = result['data']
    if not data:
        logger.warning("Video export produced no frames, nothing emitted")
        return None

    if sink is not None:
        sink.save(filename, data, VIDEO_MIME_TYPE)

    return data
