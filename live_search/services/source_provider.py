"""Searchable source records and eligibility filtering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


class LiveSearchError(RuntimeError):
    """Base class for errors raised by the live search core."""


class SourceUnavailable(LiveSearchError):
    """Raised when a source vanished or cannot be read."""


@dataclass(frozen=True, slots=True)
class Source:
    source_id: str | None
    read_content: Callable[[], str]
    persistent: bool = True

    def read(self) -> str:
        try:
            content = self.read_content()
        except SourceUnavailable:
            raise
        except (OSError, UnicodeError) as exc:
            raise SourceUnavailable(f"Source '{self.source_id}' is unreadable: {exc}") from exc
        if not isinstance(content, str):
            raise SourceUnavailable(f"Source '{self.source_id}' has no text content.")
        return content


def text_source(source_id: str | None, text: str, *, persistent: bool = True) -> Source:
    return Source(source_id=source_id, read_content=lambda: text, persistent=persistent)


def file_source(path: str | Path) -> Source:
    """Source backed by a file on disk, read fresh on every scan."""
    source_id = os.path.abspath(os.path.expanduser(str(path)))

    def _read() -> str:
        return Path(source_id).read_text(encoding="utf-8", errors="ignore")

    return Source(source_id=source_id, read_content=_read, persistent=True)


def is_eligible(source: Source, excluded_ids: Iterable[str] = ()) -> bool:
    source_id = str(source.source_id or "").strip()
    if not source_id or not source.persistent:
        return False
    return source_id not in set(excluded_ids)


def eligible_sources(sources: Iterable[Source], excluded_ids: Iterable[str] = ()) -> list[Source]:
    excluded = {str(item) for item in excluded_ids if item}
    kept: list[Source] = []
    for source in sources:
        if is_eligible(source, excluded):
            kept.append(source)
        else:
            logger.debug("Ignoring ineligible source %r", source.source_id)
    return kept


class StaticSourceProvider:
    """Provider over a fixed, ordered list of sources."""

    def __init__(self, sources: Iterable[Source] = ()) -> None:
        self._sources: list[Source] = list(sources)

    def add(self, source: Source) -> None:
        self._sources.append(source)

    def remove(self, source_id: str) -> bool:
        before = len(self._sources)
        self._sources = [item for item in self._sources if item.source_id != source_id]
        return len(self._sources) != before

    def list_eligible_sources(self, excluded_ids: Iterable[str] = ()) -> list[Source]:
        return eligible_sources(self._sources, excluded_ids)


__all__ = [
    "LiveSearchError",
    "SourceUnavailable",
    "Source",
    "text_source",
    "file_source",
    "is_eligible",
    "eligible_sources",
    "StaticSourceProvider",
]
