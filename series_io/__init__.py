"""
Force-plate series input.

This package turns the raw CSV exported by the force-plate acquisition
software into parallel numeric arrays:
1. Header line is dropped
2. Short rows are skipped, malformed numbers become 0
3. Time plus two force channels are kept

Engineering approach:
- Lenient parsing (a bad row never aborts a trial review)
- Column layout is configuration, not code
"""

from .parser import (
    Series,
    ColumnLayout,
    DEFAULT_LAYOUT,
    EXPORT_LAYOUT,
    coerce_numeric,
    parse_series,
    load_series
)

__all__ = [
    'Series',
    'ColumnLayout',
    'DEFAULT_LAYOUT',
    'EXPORT_LAYOUT',
    'coerce_numeric',
    'parse_series',
    'load_series',
]
