"""Project a result set into one results document plus a link table."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from live_search.services.result_set import ResultSet
from live_search.settings_models import DEFAULT_CONTINUATION, DEFAULT_SEPARATOR


@dataclass(frozen=True, slots=True)
class RenderLink:
    block_start: int
    block_end: int
    link_start: int
    link_end: int
    source_id: str
    match_start: int

    @property
    def target(self) -> tuple[str, int]:
        return self.source_id, self.match_start


@dataclass(frozen=True, slots=True)
class RenderedResults:
    document: str = ""
    links: tuple[RenderLink, ...] = ()

    def link_for(self, match_index: int | None) -> RenderLink | None:
        if match_index is None or match_index < 0 or match_index >= len(self.links):
            return None
        return self.links[match_index]

    def index_at(self, offset: int) -> int | None:
        """Index of the link whose span contains ``offset``."""
        starts = [link.link_start for link in self.links]
        index = bisect_right(starts, int(offset)) - 1
        if index < 0:
            return None
        link = self.links[index]
        if link.link_start <= offset < link.link_end:
            return index
        return None

    def link_at(self, offset: int) -> RenderLink | None:
        return self.link_for(self.index_at(offset))


def format_block(snippet: str, source_id: str, *, continuation: str, separator: str) -> str:
    return f"{snippet}{continuation} [{source_id}]{separator}"


def render_results(
    results: ResultSet,
    *,
    continuation: str = DEFAULT_CONTINUATION,
    separator: str = DEFAULT_SEPARATOR,
) -> RenderedResults:
    parts: list[str] = []
    links: list[RenderLink] = []
    cursor = 0
    for match in results:
        block = format_block(match.snippet, match.source_id, continuation=continuation, separator=separator)
        link_start = cursor + match.link_offset
        links.append(
            RenderLink(
                block_start=cursor,
                block_end=cursor + len(block),
                link_start=link_start,
                link_end=link_start + match.link_length,
                source_id=match.source_id,
                match_start=match.match_start,
            )
        )
        parts.append(block)
        cursor += len(block)
    return RenderedResults(document="".join(parts), links=tuple(links))


__all__ = ["RenderLink", "RenderedResults", "format_block", "render_results"]
