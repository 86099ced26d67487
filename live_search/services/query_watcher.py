"""Change detection for the live search query text."""

from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by an observer registration; ``cancel`` deregisters it."""

    def __init__(self, on_cancel: Callable[[], None] | None = None) -> None:
        self._on_cancel = on_cancel

    @property
    def active(self) -> bool:
        return self._on_cancel is not None

    def cancel(self) -> None:
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel()


class QueryWatcher:
    """Triggers a recompute only when the query text actually changed.

    Runs synchronously inside the editing callback, so there is one current
    query at any moment and unchanged text never causes a rescan.
    """

    def __init__(self, read_text: Callable[[], str], on_recompute: Callable[[str], None]) -> None:
        self._read_text = read_text
        self._on_recompute = on_recompute
        self.last_applied: str | None = None

    def on_text_changed(self, force: bool = False) -> bool:
        text = str(self._read_text() or "")
        if not force and text == self.last_applied:
            return False
        self.last_applied = text
        logger.debug("Query changed to %r (forced=%s)", text, bool(force))
        self._on_recompute(text)
        return True

    def attach(self, surface) -> Subscription:
        """Register with a query surface's change notification."""
        return surface.connect_text_changed(lambda _text, forced=False: self.on_text_changed(bool(forced)))
