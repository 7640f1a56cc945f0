"""
Video playback surface for trial review.

Engineering decisions:
- OpenCV for video decoding (universal format support)
- Playback is a coroutine: frames are decoded from the current position
  and pushed to capture-stream subscribers until the source ends
- Notifications (metadata loaded, playback ended) are plain callbacks
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Protocol

import cv2
import numpy as np

from timeline.mapper import time_to_frame

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


class FrameStream:
    """
    Live frame stream fed by a playing surface.

    Subscribers receive every decoded frame (H, W, 3) in playback order.
    """

    def __init__(self):
        self._subscribers: List[FrameCallback] = []

    def subscribe(self, callback: FrameCallback):
        self._subscribers.append(callback)

    def unsubscribe(self, callback: FrameCallback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def push(self, frame: np.ndarray):
        for callback in list(self._subscribers):
            callback(frame)


class MediaSurface(Protocol):
    """What the trim engine needs from a video player."""

    duration: float
    current_time: float

    def on_metadata_loaded(self, callback: Callable[[], None]) -> None: ...

    def on_ended(self, callback: Callable[[], None]) -> None: ...

    def off_ended(self, callback: Callable[[], None]) -> None: ...

    def capture_stream(self) -> FrameStream: ...

    async def play(self) -> None: ...


class VideoSurface:
    """
    OpenCV-backed media surface.

    Usage:
        with VideoSurface('trial.mp4') as surface:
            surface.current_time = 2.5
            await surface.play()
    """

    def __init__(self, video_path: Path):
        """
        Open a video file.

        Args:
            video_path: Path to video file

        Raises:
            FileNotFoundError: If video doesn't exist
            RuntimeError: If video cannot be opened
        """
        self.video_path = Path(video_path)

        if not self.video_path.exists():
            raise FileNotFoundError(f"Video not found: {self.video_path}")

        self.cap = cv2.VideoCapture(str(self.video_path))

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open video: {self.video_path}")

        # Encoded properties (the review timeline uses its own assumed rate)
        self.native_fps = self.cap.get(cv2.CAP_PROP_FPS)
        self.frame_count = int(self.cap.get(cv2.CAP_PROP_FRAME_COUNT))
        self.width = int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        self.height = int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self.duration = self.frame_count / self.native_fps if self.native_fps > 0 else 0.0

        self._position = 0.0
        self._stream = FrameStream()
        self._metadata_callbacks: List[Callable[[], None]] = []
        self._ended_callbacks: List[Callable[[], None]] = []

        logger.info(
            f"Opened video: {self.duration:.1f}s, {self.native_fps:.2f} FPS, "
            f"{self.frame_count} frames, {self.width}x{self.height}"
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - cleanup resources."""
        self.release()

    def release(self):
        """Release video capture resources."""
        if self.cap is not None:
            self.cap.release()
            self.cap = None

    @property
    def current_time(self) -> float:
        return self._position

    @current_time.setter
    def current_time(self, value: float):
        self._position = max(0.0, min(float(value), self.duration))

    def on_metadata_loaded(self, callback: Callable[[], None]):
        """Register a metadata callback; metadata is read on open, so it fires now."""
        self._metadata_callbacks.append(callback)
        callback()

    def on_ended(self, callback: Callable[[], None]):
        self._ended_callbacks.append(callback)

    def off_ended(self, callback: Callable[[], None]):
        if callback in self._ended_callbacks:
            self._ended_callbacks.remove(callback)

    def capture_stream(self) -> FrameStream:
        if self.cap is None:
            raise RuntimeError(f"Capture unavailable, video closed: {self.video_path}")
        return self._stream

    async def play(self):
        """
        Decode from the current position to the end of the source.

        Each frame is pushed to the capture stream; ended callbacks fire
        once the source is exhausted.
        """
        if self.cap is None:
            raise RuntimeError(f"Cannot play closed video: {self.video_path}")

        start_frame = time_to_frame(self._position, self.native_fps) if self.native_fps > 0 else 0
        self.cap.set(cv2.CAP_PROP_POS_FRAMES, start_frame)

        logger.info(f"Playback from {self._position:.3f}s (frame {start_frame})")

        current_frame = start_frame
        while current_frame < self.frame_count:
            ret, frame = self.cap.read()

            if not ret:
                logger.warning(f"Failed to read frame {current_frame}, stopping playback")
                break

            self._stream.push(frame)
            current_frame += 1
            if self.native_fps > 0:
                self._position = min(current_frame / self.native_fps, self.duration)

            # Let other tasks run between frames
            await asyncio.sleep(0)

        logger.info(f"Playback ended after {current_frame - start_frame} frames")

        for callback in list(self._ended_callbacks):
            callback()
