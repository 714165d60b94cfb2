"""Common type helpers for panchangam.

This module defines the lightweight containers exchanged between the parser,
the interval index and the presenter.  Timestamps are timezone-aware
:class:`~datetime.datetime` objects, so comparisons are between absolute
instants regardless of the offset they are displayed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class TimeInterval:
    """A named period such as one tithi, from ``start`` (inclusive) to ``end`` (exclusive)."""

    name: str
    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        """Return the interval length."""

        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class Resolution:
    """Interval active at an instant and its successor in index order."""

    current: Optional[TimeInterval] = None
    next: Optional[TimeInterval] = None


@dataclass(frozen=True)
class LineMatch:
    """Outcome of matching one interval line.

    Exactly one of ``interval`` and ``error`` is set; ``error`` says why the
    line was rejected.
    """

    line: str
    interval: Optional[TimeInterval] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.interval is not None
