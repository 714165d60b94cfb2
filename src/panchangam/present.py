"""View model handed to a presentation sink.

:func:`build_view` turns a document and an instant into plain strings; a sink
(console, web page) only has to lay them out.  :func:`render_text` is the
plain-text layout used by the command line.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .config import Settings
from .core.intervals import format_remaining
from .core.timeconv import TimeConverter
from .document import PanchangamDocument

CATEGORY_TITLES = {
    "tithi": "Tithi",
    "nakshatra": "Nakshatra",
    "yogam": "Yogam",
    "karanam": "Karanam",
}


class LoadStatus(str, Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class CategoryView:
    """Display strings for one category."""

    category: str
    current: str
    remaining: str
    next: str


@dataclass(frozen=True)
class PanchangamView:
    """Everything a sink needs to render one resolution pass."""

    status: LoadStatus
    message: str
    now: str = ""
    headers: Tuple[Tuple[str, str], ...] = ()
    backend_timestamp: Optional[str] = None
    categories: Tuple[CategoryView, ...] = field(default_factory=tuple)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["headers"] = dict(self.headers)
        data["categories"] = {c.category: asdict(c) for c in self.categories}
        return data


@runtime_checkable
class PresentationSink(Protocol):
    """Anything that can lay out a finished :class:`PanchangamView`."""

    def render(self, view: PanchangamView) -> None:
        ...


def _next_label(name: str, start: datetime, converter: TimeConverter) -> str:
    return f"{name} (starts: {converter.format(start)})"


def build_view(
    document: PanchangamDocument,
    now: datetime,
    settings: Optional[Settings] = None,
    converter: Optional[TimeConverter] = None,
) -> PanchangamView:
    """Resolve ``document`` at ``now`` and format the result for display."""

    cfg = settings or Settings()
    conv = converter or TimeConverter.from_settings(cfg)
    display = cfg.display

    categories: List[CategoryView] = []
    for category, res in document.resolve(now).items():
        categories.append(
            CategoryView(
                category=category,
                current=res.current.name if res.current else display.not_in_range,
                remaining=format_remaining(res.current.end, now) if res.current else "",
                next=_next_label(res.next.name, res.next.start, conv) if res.next else display.placeholder,
            )
        )

    headers = tuple(
        (label, value or display.placeholder) for label, value in document.headers.items()
    )
    tz = cfg.timezone
    return PanchangamView(
        status=LoadStatus.OK,
        message=f"Panchangam loaded ({tz.source_label} -> {tz.target_label} converted)",
        now=conv.format(now, seconds=True),
        headers=headers,
        backend_timestamp=document.backend_timestamp,
        categories=tuple(categories),
    )


def error_view(message: str = "Error loading panchangam data.") -> PanchangamView:
    """View for a failed load: status only, nothing else is shown."""

    return PanchangamView(status=LoadStatus.ERROR, message=message)


def render_text(view: PanchangamView, settings: Optional[Settings] = None) -> str:
    """Lay ``view`` out as plain text."""

    if view.status is LoadStatus.ERROR:
        return view.message

    target = (settings or Settings()).timezone.target_label
    out: List[str] = [f"Current time ({target}): {view.now}"]
    if view.backend_timestamp:
        out.append(f"Panchangam back-end time stamp ({target}): {view.backend_timestamp}")
    out.append("")
    width = max((len(label) for label, _ in view.headers), default=0)
    for label, value in view.headers:
        out.append(f"{label.ljust(width)} : {value}")
    for cat in view.categories:
        out.append("")
        out.append(CATEGORY_TITLES.get(cat.category, cat.category.title()))
        out.append(f"  Current : {cat.current}")
        if cat.remaining:
            out.append(f"            {cat.remaining}")
        out.append(f"  Next    : {cat.next}")
    out.append("")
    out.append(view.message)
    return "\n".join(out)
