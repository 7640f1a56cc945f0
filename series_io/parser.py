"""
Force-plate CSV parsing.

Input layout (as written by the acquisition software):
- Line 0 is a header and carries no data
- Column 0 is time, channel A (plate 1 Fz) and channel B (plate 2 Fz)
  sit at fixed offsets further right
- Rows with fewer than `min_fields` fields are ignored

Numeric fields are read like a browser's parseFloat: the longest leading
numeric prefix counts, anything else is 0.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)

# Leading numeric literal: sign, then Infinity or digits with optional
# fraction and exponent
_NUMERIC_PREFIX = re.compile(
    r'^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)'
)


@dataclass(frozen=True)
class ColumnLayout:
    """
    Where each quantity lives in a delimited row.

    Attributes:
        delimiter: Field separator
        min_fields: Minimum number of fields for a row to count
        time_column: Index of the time field
        channel_a_column: Index of the first force channel
        channel_b_column: Index of the second force channel
    """
    delimiter: str = ','
    min_fields: int = 4
    time_column: int = 0
    channel_a_column: int = 3
    channel_b_column: int = 12


DEFAULT_LAYOUT = ColumnLayout()

# Layout of the files produced by the tabular trim exporter
EXPORT_LAYOUT = ColumnLayout(
    min_fields=3,
    time_column=0,
    channel_a_column=1,
    channel_b_column=2
)


@dataclass(frozen=True)
class Series:
    """
    Parsed force series: time plus two channels, all the same length.

    Arrays are float64 and read-only; a new upload replaces the whole object.
    """
    time: np.ndarray = field(repr=False)
    channel_a: np.ndarray = field(repr=False)
    channel_b: np.ndarray = field(repr=False)

    def __post_init__(self):
        arrays = []
        for name in ('time', 'channel_a', 'channel_b'):
            arr = np.array(getattr(self, name), dtype=np.float64).reshape(-1)
            arr.setflags(write=False)
            object.__setattr__(self, name, arr)
            arrays.append(arr)

        lengths = {arr.size for arr in arrays}
        if len(lengths) != 1:
            raise ValueError(
                f"Series arrays must have equal length, got "
                f"{[arr.size for arr in arrays]}"
            )

    def __len__(self) -> int:
        return int(self.time.size)

    @property
    def is_empty(self) -> bool:
        return self.time.size == 0

    @property
    def is_time_sorted(self) -> bool:
        return bool(np.all(np.diff(self.time) >= 0))

    @classmethod
    def empty(cls) -> 'Series':
        return cls(time=[], channel_a=[], channel_b=[])


def coerce_numeric(value: Optional[str]) -> float:
    """
    Convert a raw field to float, defaulting to 0.

    Args:
        value: Raw field text (None for a missing column)

    Returns:
        Parsed leading number, or 0.0 when there is none
    """
    if value is None:
        return 0.0

    match = _NUMERIC_PREFIX.match(value)
    if match is None:
        return 0.0

    return float(match.group(0))


def _field(columns: List[str], index: int) -> Optional[str]:
    return columns[index] if index < len(columns) else None


def parse_series(raw_text: str, layout: ColumnLayout = DEFAULT_LAYOUT) -> Series:
    """
    Parse raw delimited text into a Series.

    Args:
        raw_text: Whole file content, header line first
        layout: Column layout of the input

    Returns:
        Series with one point per row that has enough fields
    """
    rows = raw_text.split('\n')[1:]

    times = []
    channel_a = []
    channel_b = []
    skipped = 0

    for row in rows:
        columns = row.split(layout.delimiter)
        if len(columns) < layout.min_fields:
            skipped += 1
            continue

        times.append(coerce_numeric(_field(columns, layout.time_column)))
        channel_a.append(coerce_numeric(_field(columns, layout.channel_a_column)))
        channel_b.append(coerce_numeric(_field(columns, layout.channel_b_column)))

    series = Series(time=times, channel_a=channel_a, channel_b=channel_b)

    logger.debug(f"Parsed {len(series)} samples, skipped {skipped} short rows")

    if not series.is_time_sorted:
        logger.warning(
            "Series time column is not non-decreasing; "
            "cut points follow first-match order"
        )

    return series


def load_series(path, layout: ColumnLayout = DEFAULT_LAYOUT) -> Series:
    """
    Read and parse a force CSV from disk.

    Args:
        path: CSV file path (str or Path)
        layout: Column layout of the input

    Returns:
        Parsed Series

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Series file not found: {path}")

    logger.info(f"Loading force series from {path}")

    raw_text = path.read_text(encoding='utf-8', errors='replace')
    series = parse_series(raw_text, layout)

    logger.info(f"Loaded {len(series)} force samples")

    return series
