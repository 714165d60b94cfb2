"""Assemble a :class:`PanchangamDocument` from raw almanac text.

One pass over the text extracts the header fields, the creation stamp and
the four interval sections.  Every extraction is independent: a missing
header is ``None`` and a missing section an empty :class:`IntervalIndex`.
Only a document with no text at all is an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .config import Settings
from .core.intervals import IntervalIndex
from .core.timeconv import TimeConverter
from .ingest.lines import (
    extract_section,
    get_backend_timestamp,
    get_header_value,
    get_intervals_from_section,
    split_lines,
)
from .ingest.source import DataSource, SourceUnavailableError
from .types import Resolution

logger = logging.getLogger(__name__)

CATEGORIES = ("tithi", "nakshatra", "yogam", "karanam")


class EmptyDocumentError(ValueError):
    """Raised when the almanac text is missing or blank."""


@dataclass(frozen=True)
class PanchangamDocument:
    """Parsed almanac: header fields, creation stamp and four interval indices."""

    headers: Mapping[str, Optional[str]]
    backend_timestamp: Optional[str]
    tithi: IntervalIndex = field(default_factory=IntervalIndex)
    nakshatra: IntervalIndex = field(default_factory=IntervalIndex)
    yogam: IntervalIndex = field(default_factory=IntervalIndex)
    karanam: IntervalIndex = field(default_factory=IntervalIndex)
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(
        cls,
        raw_text: Optional[str],
        now: Optional[datetime] = None,
        settings: Optional[Settings] = None,
        converter: Optional[TimeConverter] = None,
    ) -> "PanchangamDocument":
        """Parse ``raw_text`` into a document.

        ``now`` is recorded as :attr:`loaded_at`.  Malformed lines are skipped;
        :class:`EmptyDocumentError` is raised only when ``raw_text`` is
        ``None`` or blank.
        """

        if raw_text is None or not raw_text.strip():
            raise EmptyDocumentError("panchangam text is empty")

        cfg = settings or Settings()
        conv = converter or TimeConverter.from_settings(cfg)
        layout = cfg.layout
        lines = split_lines(raw_text)

        headers: Dict[str, Optional[str]] = {
            label: get_header_value(lines, label) for label in layout.headers
        }

        raw_stamp = get_backend_timestamp(lines, layout.backend_label)
        backend = conv.convert_backend_timestamp(raw_stamp) if raw_stamp else None

        indices: Dict[str, IntervalIndex] = {}
        for category in CATEGORIES:
            label = layout.sections.get(category)
            section = extract_section(lines, label) if label else []
            index = IntervalIndex(
                get_intervals_from_section(section, conv, summary_prefix=layout.summary_prefix)
            )
            if not index:
                logger.info("no %s intervals found (section %r)", category, label)
            for problem in index.anomalies():
                logger.warning("%s: %s", category, problem)
            indices[category] = index

        return cls(
            headers=MappingProxyType(headers),
            backend_timestamp=backend,
            loaded_at=now,
            **indices,
        )

    def categories(self) -> Dict[str, IntervalIndex]:
        """Return the interval indices keyed by category, in display order."""

        return {name: getattr(self, name) for name in CATEGORIES}

    def resolve(self, now: datetime) -> Dict[str, Resolution]:
        """Resolve every category against the same instant ``now``."""

        return {name: index.resolve(now) for name, index in self.categories().items()}


def load_document(
    source: DataSource,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
    converter: Optional[TimeConverter] = None,
) -> PanchangamDocument:
    """Fetch text from ``source`` and build a document from it.

    :class:`SourceUnavailableError` and :class:`EmptyDocumentError` are logged
    and re-raised; no partial document is returned.
    """

    try:
        text = source.fetch_text()
    except SourceUnavailableError:
        logger.error("could not load panchangam from %s", source.location)
        raise
    try:
        return PanchangamDocument.build(text, now, settings=settings, converter=converter)
    except EmptyDocumentError:
        logger.error("panchangam from %s is empty", source.location)
        raise


__all__ = ["CATEGORIES", "EmptyDocumentError", "PanchangamDocument", "load_document"]
