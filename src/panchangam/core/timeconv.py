"""Fixed-offset conversion between the almanac's civil time and the observer's.

The almanac is written in one fixed offset (Portland standard time, UTC-8)
and read in another (IST, UTC+5:30).  No timezone database is involved: a
civil time is read as if it were UTC, corrected by the source offset, and
viewed at the target offset.  All arithmetic happens on absolute instants,
so hour overflow (23:50 + 8h) rolls into the next day on its own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..config import Settings, TimezoneSettings
from ..utils.timeparse import civil_fields, civil_pattern

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y/%m/%d %H:%M"
DATE_FORMAT_SECONDS = "%Y/%m/%d %H:%M:%S"

# Creation stamps always carry seconds; searched, not anchored.
BACKEND_TIMESTAMP_RE = re.compile(civil_pattern(seconds="required"))


@dataclass(frozen=True)
class TimeConverter:
    """Convert source civil times to target instants.

    Offsets are minutes east of UTC.  The defaults give a total shift of
    +13h30m from source to target.
    """

    source_offset: int = -8 * 60
    target_offset: int = 5 * 60 + 30

    @property
    def source_tz(self) -> timezone:
        return timezone(timedelta(minutes=self.source_offset))

    @property
    def target_tz(self) -> timezone:
        return timezone(timedelta(minutes=self.target_offset))

    @classmethod
    def from_settings(cls, settings: Optional[Settings | TimezoneSettings] = None) -> "TimeConverter":
        cfg = settings if settings is not None else Settings()
        tz_cfg = getattr(cfg, "timezone", cfg)
        return cls(source_offset=tz_cfg.source_offset, target_offset=tz_cfg.target_offset)

    def _shift(self, year: int, month: int, day: int, hour: int, minute: int, second: int, offset: int) -> datetime:
        # Every field carries into the next: month 13 is January of the next
        # year, Feb 30 is Mar 2, hour 31 is 07:00 the next day.
        carry, month0 = divmod(month - 1, 12)
        try:
            first = datetime(year + carry, month0 + 1, 1, tzinfo=timezone.utc)
            as_utc = first + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
            return (as_utc - timedelta(minutes=offset)).astimezone(self.target_tz)
        except OverflowError as exc:
            raise ValueError(f"date out of range: {year:04d}/{month:02d}/{day:02d}") from exc

    def convert(self, year: int, month: int, day: int, hour: int, minute: int, second: int = 0) -> datetime:
        """Return the instant of a source civil time, expressed at the target offset.

        Out-of-range fields roll over into the next larger unit.  ``ValueError``
        is raised when the result falls outside the representable years.
        """

        return self._shift(year, month, day, hour, minute, second, self.source_offset)

    def localize(self, year: int, month: int, day: int, hour: int, minute: int, second: int = 0) -> datetime:
        """Return the instant of a civil time already read at the target offset."""

        return self._shift(year, month, day, hour, minute, second, self.target_offset)

    def now(self) -> datetime:
        """Return the current instant at the target offset."""

        return datetime.now(self.target_tz)

    def format(self, ts: datetime, seconds: bool = False) -> str:
        """Format ``ts`` as ``YYYY/MM/DD HH:MM[:SS]`` on the target wall clock."""

        return ts.astimezone(self.target_tz).strftime(DATE_FORMAT_SECONDS if seconds else DATE_FORMAT)

    def convert_backend_timestamp(self, raw: str) -> str:
        """Convert a creation stamp like ``2025/12/01 15:15:42`` to the target offset.

        When ``raw`` does not contain such a stamp it is returned unchanged so
        that callers can still show it.
        """

        m = BACKEND_TIMESTAMP_RE.search(raw)
        if not m:
            logger.debug("backend timestamp %r not recognised; keeping raw value", raw)
            return raw
        try:
            ts = self.convert(*civil_fields(m))
        except ValueError:
            logger.debug("backend timestamp %r is out of range; keeping raw value", raw)
            return raw
        return self.format(ts, seconds=True)


__all__ = ["TimeConverter", "BACKEND_TIMESTAMP_RE", "DATE_FORMAT", "DATE_FORMAT_SECONDS"]
