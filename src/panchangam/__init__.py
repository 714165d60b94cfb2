"""Resolve the running Tithi, Nakshatra, Yogam and Karanam from a panchangam file."""

from .core import IntervalIndex, TimeConverter, format_remaining
from .document import EmptyDocumentError, PanchangamDocument, load_document
from .types import Resolution, TimeInterval

__version__ = "0.1.0"

__all__ = [
    "IntervalIndex",
    "TimeConverter",
    "format_remaining",
    "EmptyDocumentError",
    "PanchangamDocument",
    "load_document",
    "Resolution",
    "TimeInterval",
]
