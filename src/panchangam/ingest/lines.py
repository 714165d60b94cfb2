# src/panchangam/ingest/lines.py
"""Line-oriented parser for panchangam text files.

Recognised line kinds:

A) Header:
   Samvatsaram : Vishwaavasu
   -> label matched by case-insensitive prefix, value after the colon

B) Creation stamp (source timezone):
   Date and time created : 2025/12/01 15:15:42

C) Section header:
   Thithi details:

D) Interval record within a section (source timezone, no seconds):
   Prathama: 2025/12/04 15:14 to 2025/12/05 11:26

E) Summary annotation, ignored:
   Next Thithi: ...

The format has no escaping and no schema, so nothing here raises on a
malformed line: the line is skipped and the value treated as absent.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from ..core.timeconv import TimeConverter
from ..types import LineMatch, TimeInterval
from ..utils.timeparse import civil_fields, civil_pattern

logger = logging.getLogger(__name__)

INTERVAL_RE = re.compile(
    r"^(?P<name>.+?):\s*"
    + civil_pattern("start_", seconds="none")
    + " to "
    + civil_pattern("end_", seconds="none")
    + "$"
)
SECTION_HEADER_RE = re.compile(r"details\s*:$", re.IGNORECASE)
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

BACKEND_LABEL = "date and time created"
SUMMARY_PREFIX = "next "

_default_converter = TimeConverter()


def split_lines(text: str) -> List[str]:
    """Split ``text`` on any line-ending style."""
    return LINE_BREAK_RE.split(text)


def extract_section(lines: Sequence[str], start_label: str) -> List[str]:
    """Return the raw lines following the ``start_label`` header.

    Collection stops at the next ``... details:`` header that does not itself
    start with ``start_label``.  An absent label yields an empty list.
    """
    start_idx = next(
        (i for i, line in enumerate(lines) if line.strip().startswith(start_label)),
        -1,
    )
    if start_idx == -1:
        return []

    out: List[str] = []
    for line in lines[start_idx + 1 :]:
        trimmed = line.strip()
        if SECTION_HEADER_RE.search(trimmed) and not trimmed.startswith(start_label):
            break
        out.append(line)
    return out


def match_interval_line(line: str, converter: Optional[TimeConverter] = None) -> LineMatch:
    """Match ``line`` against the interval grammar and report the outcome."""
    conv = converter or _default_converter
    trimmed = line.strip()
    if not trimmed:
        return LineMatch(line, error="blank line")
    m = INTERVAL_RE.match(trimmed)
    if not m:
        if " to " not in trimmed:
            return LineMatch(line, error="missing 'to' between start and end")
        return LineMatch(line, error="does not match 'name: YYYY/MM/DD HH:MM to YYYY/MM/DD HH:MM'")

    name = m.group("name").strip()
    if not name:
        return LineMatch(line, error="empty interval name")
    try:
        start = conv.convert(*civil_fields(m, "start_"))
        end = conv.convert(*civil_fields(m, "end_"))
    except ValueError as exc:
        return LineMatch(line, error=f"invalid date: {exc}")
    return LineMatch(line, interval=TimeInterval(name, start, end))


def parse_interval_line(line: str, converter: Optional[TimeConverter] = None) -> Optional[TimeInterval]:
    """Return the interval described by ``line`` or ``None``."""
    return match_interval_line(line, converter).interval


def get_intervals_from_section(
    section_lines: Sequence[str],
    converter: Optional[TimeConverter] = None,
    *,
    summary_prefix: str = SUMMARY_PREFIX,
) -> List[TimeInterval]:
    """Build intervals from every valid record line of a section."""
    prefix = summary_prefix.lower()
    intervals: List[TimeInterval] = []
    for raw in section_lines:
        line = raw.strip()
        if not line:
            continue
        if line.lower().startswith(prefix):
            continue
        result = match_interval_line(line, converter)
        if result.ok:
            intervals.append(result.interval)  # type: ignore[arg-type]
        else:
            logger.debug("skipping line %r: %s", line, result.error)
    return intervals


def _find_prefixed(lines: Sequence[str], label: str) -> Optional[str]:
    lower_label = label.lower()
    return next((line for line in lines if line.strip().lower().startswith(lower_label)), None)


def get_header_value(lines: Sequence[str], label: str) -> Optional[str]:
    """Value of a ``Label : value`` header line, or ``None``.

    The value ends at a second colon, if the line has one.
    """
    line = _find_prefixed(lines, label)
    if line is None:
        return None
    parts = line.split(":")
    if len(parts) < 2:
        return None
    return parts[1].strip()


def get_backend_timestamp(lines: Sequence[str], label: str = BACKEND_LABEL) -> Optional[str]:
    """Raw creation stamp, still in the source timezone.

    Everything after the first colon is kept, so the colons of the time of
    day survive.
    """
    line = _find_prefixed(lines, label)
    if line is None:
        return None
    parts = line.split(":")
    if len(parts) < 2:
        return None
    return ":".join(parts[1:]).strip()


__all__ = [
    "INTERVAL_RE",
    "SECTION_HEADER_RE",
    "split_lines",
    "extract_section",
    "match_interval_line",
    "parse_interval_line",
    "get_intervals_from_section",
    "get_header_value",
    "get_backend_timestamp",
]
