"""
Trimmed force-series export.

Output format:
    Time,Force1,Force2
    <time>,<channel_a>,<channel_b>
    ...

Rows are joined with '\\n' and there is no trailing newline, so an empty
trim is exactly the header line followed by '\\n'.
"""

import logging
import re
from typing import Optional

import numpy as np

from series_io.parser import Series
from timeline.mapper import time_to_series_index

logger = logging.getLogger(__name__)

CSV_HEADER = 'Time,Force1,Force2'
CSV_FILENAME = 'trimmed-data.csv'
CSV_MIME_TYPE = 'text/csv'

# repr pads exponents to two digits ('1e-07'); JS does not
_EXPONENT_PADDING = re.compile(r'e([+-])0*(\d)')


def format_number(value: float) -> str:
    """
    Render a number the way a JS template string would.

    Integral values drop the decimal point (1.0 -> '1'). Magnitudes in
    [1e-6, 1e21) are positional with the shortest round-trip digits;
    anything smaller or larger uses an unpadded exponent (1e-7, 1e+21).
    """
    value = float(value)
    if np.isnan(value):
        return 'NaN'
    if np.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    if 1e-6 <= abs(value) < 1e21:
        return np.format_float_positional(value, unique=True, trim='-')
    return _EXPONENT_PADDING.sub(r'e\1\2', repr(value))


def slice_series_from(series: Series, cut: int) -> Series:
    """Rows [cut, end) of every channel as a new Series."""
    cut = max(0, cut)
    return Series(
        time=series.time[cut:],
        channel_a=series.channel_a[cut:],
        channel_b=series.channel_b[cut:]
    )


def serialize_series(series: Series, header: str = CSV_HEADER) -> str:
    rows = [
        f"{format_number(t)},{format_number(a)},{format_number(b)}"
        for t, a, b in zip(series.time, series.channel_a, series.channel_b)
    ]
    return f"{header}\n" + '\n'.join(rows)


def export_series_from(
    series: Series,
    current_time: float,
    sink=None,
    filename: str = CSV_FILENAME,
    header: str = CSV_HEADER
) -> bytes:
    """
    Export the part of the series at or after current_time.

    Args:
        series: Parsed force series (left untouched)
        current_time: Cut time; the first row with time >= current_time is kept
        sink: Optional blob sink receiving the buffer
        filename: Name handed to the sink
        header: Header line of the output

    Returns:
        UTF-8 encoded CSV buffer
    """
    cut = time_to_series_index(series, current_time)
    trimmed = slice_series_from(series, cut)

    data = serialize_series(trimmed, header).encode('utf-8')

    logger.info(
        f"Trimmed force series at {current_time:.3f}s: "
        f"kept {len(trimmed)}/{len(series)} samples from row {cut}"
    )

    if sink is not None:
        sink.save(filename, data, CSV_MIME_TYPE)

    return data
