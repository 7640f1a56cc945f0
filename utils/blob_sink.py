"""Destinations for exported buffers (the 'save file' step)."""

import logging
from pathlib import Path
from typing import Dict, Protocol, Tuple

logger = logging.getLogger(__name__)


class BlobSink(Protocol):
    """Accepts a named buffer and makes it available to the user."""

    def save(self, filename: str, data: bytes, mime_type: str) -> None: ...


class DirectorySink:
    """
    Writes each buffer to a file in an output directory.

    Re-exporting under the same name overwrites the previous file.
    """

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.saved: Dict[str, Path] = {}

    def save(self, filename: str, data: bytes, mime_type: str):
        path = self.output_dir / filename
        path.write_bytes(data)
        self.saved[filename] = path
        logger.info(f"✓ Exported {filename} ({mime_type}, {len(data)} bytes) → {path}")


class MemorySink:
    """Keeps buffers in memory, keyed by filename."""

    def __init__(self):
        self.buffers: Dict[str, Tuple[bytes, str]] = {}

    def save(self, filename: str, data: bytes, mime_type: str):
        self.buffers[filename] = (data, mime_type)
        logger.debug(f"Stored {filename} ({mime_type}, {len(data)} bytes)")
