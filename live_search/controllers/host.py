"""Capabilities the live search controller consumes from its host."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol

from live_search.services.query_watcher import Subscription
from live_search.services.result_renderer import RenderLink
from live_search.services.source_provider import Source

TextChangedCallback = Callable[[str, bool], None]


class QuerySurface(Protocol):
    surface_id: str

    def read_current_text(self) -> str: ...

    def connect_text_changed(self, callback: TextChangedCallback) -> Subscription: ...

    def clear(self) -> None: ...

    def focus(self) -> None: ...


class ResultsSurface(Protocol):
    surface_id: str

    def show_document(self, document: str, links: tuple[RenderLink, ...]) -> None: ...

    def set_cursor_offset(self, offset: int) -> None: ...

    def show(self) -> None: ...

    def hide(self) -> None: ...

    def dispose(self) -> None: ...


class LiveSearchHost(Protocol):
    def list_eligible_sources(self, excluded_ids: Iterable[str]) -> list[Source]: ...

    def acquire_query_surface(self) -> QuerySurface: ...

    def acquire_results_surface(self) -> tuple[ResultsSurface, bool]: ...

    def set_cursor(self, surface: ResultsSurface, offset: int) -> None: ...

    def open_source_at(self, source_id: str, offset: int) -> None: ...

    def capture_layout(self) -> Any: ...

    def restore_layout(self, token: Any) -> None: ...

    def show_status(self, text: str) -> None: ...


__all__ = ["TextChangedCallback", "QuerySurface", "ResultsSurface", "LiveSearchHost"]
