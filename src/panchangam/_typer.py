"""Typer parameter helpers for the panchangam CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Any, NoReturn, Optional, Sequence

import typer

from .core.timeconv import TimeConverter
from .utils.timeparse import parse_civil


def bad_parameter(
    message: str,
    *,
    ctx: Optional[typer.Context] = None,
    param: Any = None,
    param_hint: Optional[str] = None,
) -> NoReturn:
    """Raise :class:`typer.BadParameter`, passing through only the hints given."""

    kwargs: dict[str, Any] = {}
    if ctx is not None:
        kwargs["ctx"] = ctx
    if param is not None:
        kwargs["param"] = param
    if param_hint is not None:
        kwargs["param_hint"] = param_hint
    raise typer.BadParameter(message, **kwargs)


def parse_now(value: Optional[str], converter: TimeConverter) -> datetime:
    """Return the instant named by ``--now`` (target wall clock), or the current one."""

    if value is None:
        return converter.now()
    try:
        return converter.localize(*parse_civil(value))
    except ValueError as exc:
        bad_parameter(str(exc), param_hint="--now")


def check_choice(value: str, choices: Sequence[str], param_hint: str) -> str:
    """Return ``value`` lower-cased if it is one of ``choices``."""

    key = value.lower()
    if key not in choices:
        bad_parameter(f"unknown value {value!r}; choose from {', '.join(choices)}", param_hint=param_hint)
    return key
