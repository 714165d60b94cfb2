"""Core algorithms and data structures for panchangam."""

from .intervals import IntervalIndex, format_remaining
from .timeconv import TimeConverter

__all__ = [
    "IntervalIndex",
    "format_remaining",
    "TimeConverter",
]
