"""Utilities for parsing the almanac's civil timestamp notation.

Every timestamp in a panchangam file is written as ``YYYY/MM/DD HH:MM``,
optionally followed by ``:SS``.  The helpers here build the matching regular
expression fragments so that interval lines, the creation stamp and command
line arguments all share one grammar.
"""

from __future__ import annotations

import re
from typing import Literal, Tuple

CivilFields = Tuple[int, int, int, int, int, int]
Seconds = Literal["none", "optional", "required"]


def civil_pattern(prefix: str = "", seconds: Seconds = "optional") -> str:
    """Return a regex fragment for ``YYYY/MM/DD HH:MM[:SS]``.

    Group names are ``year`` ... ``second`` with ``prefix`` prepended so that
    several timestamps can live in one pattern.
    """

    p = prefix
    body = (
        rf"(?P<{p}year>\d{{4}})/(?P<{p}month>\d{{2}})/(?P<{p}day>\d{{2}}) "
        rf"(?P<{p}hour>\d{{2}}):(?P<{p}minute>\d{{2}})"
    )
    if seconds == "required":
        body += rf":(?P<{p}second>\d{{2}})"
    elif seconds == "optional":
        body += rf"(?::(?P<{p}second>\d{{2}}))?"
    return body


CIVIL_RE = re.compile(civil_pattern())


def civil_fields(match: "re.Match[str]", prefix: str = "") -> CivilFields:
    """Return ``(year, month, day, hour, minute, second)`` from ``match``.

    A missing seconds group yields ``0``.
    """

    groups = match.groupdict()
    second = groups.get(prefix + "second")
    return (
        int(groups[prefix + "year"]),
        int(groups[prefix + "month"]),
        int(groups[prefix + "day"]),
        int(groups[prefix + "hour"]),
        int(groups[prefix + "minute"]),
        int(second) if second else 0,
    )


def parse_civil(text: str) -> CivilFields:
    """Parse ``text`` as ``YYYY/MM/DD HH:MM`` with optional ``:SS``.

    Leading and trailing whitespace is ignored.  ``ValueError`` is raised on
    malformed input.
    """

    m = CIVIL_RE.fullmatch(text.strip())
    if not m:
        raise ValueError(f"invalid timestamp {text!r}; expected YYYY/MM/DD HH:MM[:SS]")
    return civil_fields(m)
