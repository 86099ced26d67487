"""Controller owning the live search session lifecycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from PySide6.QtCore import QObject, Signal

from live_search.controllers.host import LiveSearchHost, QuerySurface, ResultsSurface
from live_search.core.keybindings import (
    ACTION_ACTIVATE,
    ACTION_NEXT,
    ACTION_PREV,
    ACTION_QUIT,
    ACTION_REFRESH,
    ACTION_START,
)
from live_search.services.live_search_service import PatternCompileError, Query, compile_query, search
from live_search.services.query_watcher import QueryWatcher, Subscription
from live_search.services.result_renderer import RenderedResults, render_results
from live_search.services.result_set import MatchDescriptor, ResultSet
from live_search.services.source_provider import eligible_sources
from live_search.settings_models import SearchOptions

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class LiveSearchSession:
    query_surface: QuerySurface
    results_surface: ResultsSurface
    results_surface_created: bool
    layout_token: Any
    query: Query = field(default_factory=Query)
    results: ResultSet = field(default_factory=ResultSet)
    rendered: RenderedResults = field(default_factory=RenderedResults)
    error: str | None = None
    status_text: str = ""
    watcher: QueryWatcher | None = None
    subscription: Subscription | None = None

    def excluded_ids(self) -> tuple[str, ...]:
        return (str(self.query_surface.surface_id), str(self.results_surface.surface_id))


class LiveSearchController(QObject):
    sessionStarted = Signal()
    sessionEnded = Signal()
    resultsChanged = Signal(int)

    def __init__(self, host: LiveSearchHost, *, options: SearchOptions | None = None, parent=None):
        super().__init__(parent)
        self.host = host
        self.options = options or SearchOptions()
        self.session: LiveSearchSession | None = None

    @property
    def is_active(self) -> bool:
        return self.session is not None

    def commands(self) -> dict[str, Callable[[], object]]:
        return {
            ACTION_START: self.start,
            ACTION_QUIT: self.quit,
            ACTION_NEXT: self.select_next,
            ACTION_PREV: self.select_prev,
            ACTION_ACTIVATE: self.activate_selected,
            ACTION_REFRESH: self.refresh,
        }

    def start(self) -> bool:
        if self.session is not None:
            logger.debug("Live search already active; start ignored.")
            return False

        layout_token = self.host.capture_layout()
        query_surface = self.host.acquire_query_surface()
        results_surface, created = self.host.acquire_results_surface()
        session = LiveSearchSession(
            query_surface=query_surface,
            results_surface=results_surface,
            results_surface_created=bool(created),
            layout_token=layout_token,
        )
        session.watcher = QueryWatcher(
            query_surface.read_current_text,
            lambda text: self._recompute(session, text),
        )
        query_surface.clear()
        session.watcher.last_applied = ""
        self.session = session

        self._present(session)
        results_surface.show()
        session.subscription = session.watcher.attach(query_surface)
        query_surface.focus()
        logger.debug("Live search session started.")
        self.sessionStarted.emit()
        return True

    def on_query_changed(self, force: bool = False) -> bool:
        session = self.session
        if session is None or session.watcher is None:
            return False
        return session.watcher.on_text_changed(force)

    def refresh(self) -> bool:
        return self.on_query_changed(force=True)

    def _recompute(self, session: LiveSearchSession, text: str) -> None:
        if session is not self.session:
            return
        session.query = compile_query(text, self.options)
        try:
            sources = eligible_sources(
                self.host.list_eligible_sources(session.excluded_ids()),
                session.excluded_ids(),
            )
            results = search(session.query, sources, context_chars=self.options.context_chars)
        except PatternCompileError as exc:
            logger.debug("Live search pattern rejected: %s", exc)
            session.error = exc.message
            session.results = ResultSet()
            session.status_text = f"Invalid pattern: {exc.message}"
        else:
            session.error = None
            session.results = results
            if session.query.is_empty:
                session.status_text = ""
            else:
                session.status_text = f"{len(results)} match(es) in {len(sources)} source(s)."
        self._present(session)

    def _present(self, session: LiveSearchSession) -> None:
        session.rendered = render_results(
            session.results,
            continuation=self.options.continuation,
            separator=self.options.separator,
        )
        session.results_surface.show_document(session.rendered.document, session.rendered.links)
        self._move_cursor_to_selection(session)
        self.host.show_status(session.status_text)
        self.resultsChanged.emit(len(session.results))

    def _move_cursor_to_selection(self, session: LiveSearchSession) -> None:
        link = session.rendered.link_for(session.results.selected_index)
        if link is not None:
            self.host.set_cursor(session.results_surface, link.link_start)

    def select_next(self) -> MatchDescriptor | None:
        return self._navigate(forward=True)

    def select_prev(self) -> MatchDescriptor | None:
        return self._navigate(forward=False)

    def _navigate(self, *, forward: bool) -> MatchDescriptor | None:
        session = self.session
        if session is None or not session.results:
            return None
        match = session.results.next() if forward else session.results.prev()
        self._move_cursor_to_selection(session)
        return match

    def activate_selected(self) -> bool:
        session = self.session
        if session is None:
            return False
        match = session.results.selected
        if match is None:
            return False
        self.host.open_source_at(match.source_id, match.match_start)
        self.quit()
        return True

    def activate_at(self, offset: int) -> bool:
        """Activate the result whose link covers ``offset`` in the results document."""
        session = self.session
        if session is None:
            return False
        index = session.rendered.index_at(offset)
        if index is None:
            return False
        session.results.select(session.results[index])
        return self.activate_selected()

    def quit(self) -> bool:
        session = self.session
        if session is None:
            return False
        self.session = None
        if session.subscription is not None:
            session.subscription.cancel()
        if session.results_surface_created:
            session.results_surface.dispose()
        else:
            session.results_surface.hide()
        self.host.restore_layout(session.layout_token)
        self.host.show_status("")
        logger.debug("Live search session ended.")
        self.sessionEnded.emit()
        return True
