from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QLineEdit

from live_search.controllers.host import TextChangedCallback
from live_search.services.query_watcher import Subscription


class QueryPane(QLineEdit):
    """Single-line query input feeding the live search watcher."""

    queryEdited = Signal(str, bool)

    SURFACE_ID = "*live-search-query*"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.surface_id = self.SURFACE_ID
        self.setPlaceholderText("Search open files...")
        self.setClearButtonEnabled(True)
        self.textChanged.connect(self._emit_edited)

    def _emit_edited(self, text: str) -> None:
        self.queryEdited.emit(str(text or ""), False)

    def request_refresh(self) -> None:
        self.queryEdited.emit(self.read_current_text(), True)

    def read_current_text(self) -> str:
        return str(self.text() or "")

    def connect_text_changed(self, callback: TextChangedCallback) -> Subscription:
        def _slot(text: str, forced: bool) -> None:
            callback(text, forced)

        self.queryEdited.connect(_slot)
        return Subscription(lambda: self.queryEdited.disconnect(_slot))

    def focus(self) -> None:
        self.setFocus()
        self.selectAll()
