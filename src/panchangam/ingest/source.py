# src/panchangam/ingest/source.py
"""Data sources that supply the raw almanac text.

A source only has to provide :meth:`DataSource.fetch_text`.  Any failure to
obtain the text (missing file, HTTP error, undecodable bytes) is reported as
:class:`SourceUnavailableError` so that callers can tell it apart from a
document that was fetched but turned out empty.
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable

import requests

from ..config import Settings

logger = logging.getLogger(__name__)


class SourceUnavailableError(OSError):
    """Raised when the almanac text cannot be obtained."""

    def __init__(self, message: str, *, location: str):
        self.location = location
        super().__init__(f"{location}: {message}")


@runtime_checkable
class DataSource(Protocol):
    """Anything that can fetch the almanac text."""

    location: str

    def fetch_text(self) -> str:
        """Return the full document text or raise :class:`SourceUnavailableError`."""


@dataclass
class FileSource:
    """Read the almanac from a local file."""

    path: Union[str, pathlib.Path]
    encoding: str = "utf8"

    @property
    def location(self) -> str:
        return str(self.path)

    def fetch_text(self) -> str:
        p = pathlib.Path(self.path)
        try:
            return p.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnavailableError(str(exc), location=self.location) from exc


@dataclass
class HttpSource:
    """Download the almanac over HTTP(S)."""

    url: str
    timeout: float = 10.0
    encoding: Optional[str] = None
    session: Optional[requests.Session] = None

    @property
    def location(self) -> str:
        return self.url

    def fetch_text(self) -> str:
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceUnavailableError(f"could not load document: {exc}", location=self.url) from exc
        if self.encoding:
            response.encoding = self.encoding
        return response.text


def open_source(location: Optional[str] = None, settings: Optional[Settings] = None) -> DataSource:
    """Return a source for ``location``, defaulting to ``settings.source.location``.

    ``http://`` and ``https://`` locations are fetched with :class:`HttpSource`;
    anything else is treated as a file path.
    """
    cfg = settings or Settings()
    loc = location or cfg.source.location
    if loc.lower().startswith(("http://", "https://")):
        logger.debug("using HTTP source %s", loc)
        return HttpSource(loc, timeout=cfg.source.timeout)
    logger.debug("using file source %s", loc)
    return FileSource(loc, encoding=cfg.source.encoding)
