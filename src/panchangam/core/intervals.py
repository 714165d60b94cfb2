"""Ordered interval sequences and the "which one is running now" query."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Iterator, List, Sequence, Tuple

from ..types import Resolution, TimeInterval


class IntervalIndex(Sequence[TimeInterval]):
    """Immutable, ordered sequence of :class:`TimeInterval`.

    Order is the order of appearance in the source text; intervals are assumed
    chronological and non-overlapping and are never re-sorted.  Use
    :meth:`anomalies` to check that assumption.
    """

    __slots__ = ("_intervals",)

    def __init__(self, intervals: Iterable[TimeInterval] = ()) -> None:
        self._intervals: Tuple[TimeInterval, ...] = tuple(intervals)

    def __getitem__(self, idx):  # type: ignore[override]
        return self._intervals[idx]

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[TimeInterval]:
        return iter(self._intervals)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IntervalIndex):
            return self._intervals == other._intervals
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._intervals)

    def __repr__(self) -> str:  # pragma: no cover
        return f"IntervalIndex({len(self._intervals)} intervals)"

    def resolve(self, now: datetime) -> Resolution:
        """Return the interval containing ``now`` and the one after it.

        Start is inclusive and end exclusive, so an instant on a boundary
        belongs to the interval that begins there.
        """

        for i, iv in enumerate(self._intervals):
            if iv.contains(now):
                nxt = self._intervals[i + 1] if i + 1 < len(self._intervals) else None
                return Resolution(current=iv, next=nxt)
        return Resolution()

    def anomalies(self) -> List[str]:
        """Describe intervals that break the well-formedness assumptions.

        Reports empty or inverted ranges, starts that go backwards and
        intervals that overlap their predecessor.  An empty list means the
        index is chronological and non-overlapping.
        """

        problems: List[str] = []
        prev: TimeInterval | None = None
        for i, iv in enumerate(self._intervals):
            if iv.start >= iv.end:
                problems.append(f"#{i} {iv.name}: start is not before end")
            if prev is not None:
                if iv.start < prev.start:
                    problems.append(f"#{i} {iv.name}: starts before preceding {prev.name}")
                elif iv.start < prev.end:
                    problems.append(f"#{i} {iv.name}: overlaps preceding {prev.name}")
            prev = iv
        return problems


def format_remaining(end: datetime, now: datetime) -> str:
    """Describe the time left until ``end`` in whole hours and minutes."""

    remaining = end - now
    if remaining <= timedelta(0):
        return "Ended just now"

    total_minutes = remaining // timedelta(minutes=1)
    hours, minutes = divmod(total_minutes, 60)

    if hours <= 0 and minutes <= 0:
        return "Ending now"
    if hours == 0:
        return f"{minutes} minutes remaining"
    if minutes == 0:
        return f"{hours} hours remaining"
    return f"{hours} hours {minutes} minutes remaining"
