"""Ordered first-match results with a cyclic selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class MatchDescriptor:
    source_id: str
    match_start: int
    match_end: int
    snippet: str
    link_offset: int
    link_length: int

    @property
    def target(self) -> tuple[str, int]:
        return self.source_id, self.match_start


class ResultSet:
    """Result list owned by one live search session.

    The selection is held by reference to a descriptor, so the selected
    index is always derived from the current sequence. ``rebuild`` replaces
    the sequence wholesale and selects the first element.
    """

    def __init__(self, matches: Iterable[MatchDescriptor] = ()) -> None:
        self._matches: tuple[MatchDescriptor, ...] = ()
        self._selected: MatchDescriptor | None = None
        self.rebuild(matches)

    def rebuild(self, matches: Iterable[MatchDescriptor]) -> None:
        self._matches = tuple(matches)
        self._selected = self._matches[0] if self._matches else None

    @property
    def matches(self) -> tuple[MatchDescriptor, ...]:
        return self._matches

    @property
    def selected(self) -> MatchDescriptor | None:
        return self._selected

    @property
    def selected_index(self) -> int | None:
        if self._selected is None:
            return None
        for index, match in enumerate(self._matches):
            if match is self._selected:
                return index
        return None

    def select(self, match: MatchDescriptor) -> bool:
        if not any(item is match for item in self._matches):
            return False
        self._selected = match
        return True

    def next(self) -> MatchDescriptor | None:
        return self._step(1)

    def prev(self) -> MatchDescriptor | None:
        return self._step(-1)

    def _step(self, delta: int) -> MatchDescriptor | None:
        if not self._matches:
            return None
        index = self.selected_index
        if index is None:
            index = 0 if delta > 0 else len(self._matches) - 1
        else:
            index = (index + delta) % len(self._matches)
        self._selected = self._matches[index]
        return self._selected

    def __len__(self) -> int:
        return len(self._matches)

    def __iter__(self) -> Iterator[MatchDescriptor]:
        return iter(self._matches)

    def __getitem__(self, index: int) -> MatchDescriptor:
        return self._matches[index]

    def __bool__(self) -> bool:
        return bool(self._matches)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._matches == other._matches and self.selected_index == other.selected_index

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ResultSet({len(self._matches)} match(es), selected={self.selected_index})"
