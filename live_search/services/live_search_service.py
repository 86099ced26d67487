"""First-match-per-source search used by the live search session."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable

from live_search.services.result_set import MatchDescriptor, ResultSet
from live_search.services.source_provider import LiveSearchError, Source, SourceUnavailable
from live_search.settings_models import DEFAULT_CONTEXT_CHARS, SearchOptions

logger = logging.getLogger(__name__)


class PatternCompileError(LiveSearchError):
    """Raised when the query text cannot be compiled into a pattern."""

    def __init__(self, query_text: str, message: str) -> None:
        super().__init__(f"Invalid pattern {query_text!r}: {message}")
        self.query_text = query_text
        self.message = message


@dataclass(frozen=True, slots=True)
class Query:
    text: str = ""
    pattern: re.Pattern[str] | None = None
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.text

    @property
    def is_valid(self) -> bool:
        return self.error is None


def compile_query(text: str, options: SearchOptions | None = None) -> Query:
    raw = str(text or "")
    if not raw:
        return Query()
    opts = options or SearchOptions()
    pattern_text = raw if opts.use_regex else re.escape(raw)
    if opts.whole_word:
        pattern_text = r"\b" + pattern_text + r"\b"
    flags = 0 if opts.case_sensitive else re.IGNORECASE
    try:
        pattern = re.compile(pattern_text, flags)
    except re.error as exc:
        return Query(text=raw, error=str(exc))
    return Query(text=raw, pattern=pattern)


def find_first_match(
    pattern: re.Pattern[str],
    source_id: str,
    content: str,
    *,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> MatchDescriptor | None:
    """Describe the first non-empty match of ``pattern`` in ``content``.

    The snippet runs from the start of the matched line to ``context_chars``
    past the match end, clipped to the content.
    """
    for match in pattern.finditer(content):
        start = int(match.start())
        end = int(match.end())
        if end <= start:
            continue
        line_start = content.rfind("\n", 0, start) + 1
        snippet_end = min(end + max(0, int(context_chars)), len(content))
        return MatchDescriptor(
            source_id=source_id,
            match_start=start,
            match_end=end,
            snippet=content[line_start:snippet_end],
            link_offset=start - line_start,
            link_length=end - start,
        )
    return None


def search(
    query: Query,
    sources: Iterable[Source],
    *,
    context_chars: int = DEFAULT_CONTEXT_CHARS,
) -> ResultSet:
    if not query.is_valid:
        raise PatternCompileError(query.text, str(query.error))
    if query.is_empty or query.pattern is None:
        return ResultSet()

    matches: list[MatchDescriptor] = []
    scanned: set[str] = set()
    for source in sources:
        source_id = str(source.source_id or "")
        if not source_id or source_id in scanned:
            continue
        scanned.add(source_id)
        try:
            content = source.read()
        except SourceUnavailable as exc:
            logger.warning("Skipping source during live search: %s", exc)
            continue
        match = find_first_match(query.pattern, source_id, content, context_chars=context_chars)
        if match is not None:
            matches.append(match)

    logger.debug("Query %r matched %d of %d source(s)", query.text, len(matches), len(scanned))
    return ResultSet(matches)


__all__ = [
    "PatternCompileError",
    "Query",
    "compile_query",
    "find_first_match",
    "search",
]
