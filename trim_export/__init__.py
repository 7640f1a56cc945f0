"""
Trim exporters: cut point → downloadable buffers.

- Tabular: slices the force series at the first row at/after the cut time
- Media: records playback from the cut time to the end of the video

Both hand a fixed-name buffer to a blob sink:
- trimmed-data.csv (text/csv)
- trimmed-video.mp4 (video/mp4)
"""

from .tabular import (
    CSV_HEADER,
    CSV_FILENAME,
    CSV_MIME_TYPE,
    format_number,
    slice_series_from,
    serialize_series,
    export_series_from
)
from .media import (
    VIDEO_FILENAME,
    VIDEO_MIME_TYPE,
    FrameRecorder,
    export_media_from
)

__all__ = [
    'CSV_HEADER',
    'CSV_FILENAME',
    'CSV_MIME_TYPE',
    'format_number',
    'slice_series_from',
    'serialize_series',
    'export_series_from',
    'VIDEO_FILENAME',
    'VIDEO_MIME_TYPE',
    'FrameRecorder',
    'export_media_from',
]
