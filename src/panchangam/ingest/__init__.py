"""Utility modules for reading panchangam documents."""

from .lines import (
    extract_section,
    get_backend_timestamp,
    get_header_value,
    get_intervals_from_section,
    match_interval_line,
    parse_interval_line,
    split_lines,
)
from .source import DataSource, FileSource, HttpSource, SourceUnavailableError, open_source

__all__ = [
    "extract_section",
    "get_backend_timestamp",
    "get_header_value",
    "get_intervals_from_section",
    "match_interval_line",
    "parse_interval_line",
    "split_lines",
    "DataSource",
    "FileSource",
    "HttpSource",
    "SourceUnavailableError",
    "open_source",
]
