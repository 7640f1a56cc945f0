"""Shared utilities for the trial trim tool."""

from .config_loader import load_config, get_nested_config, TrimSettings
from .blob_sink import DirectorySink, MemorySink
from .video_io import FrameStream, VideoSurface

__all__ = [
    'load_config',
    'get_nested_config',
    'TrimSettings',
    'DirectorySink',
    'MemorySink',
    'FrameStream',
    'VideoSurface',
]
