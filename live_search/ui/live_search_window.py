"""Editor window hosting live search over its open tabs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from PySide6.QtCore import QByteArray, Qt
from PySide6.QtGui import QAction, QTextCursor
from PySide6.QtWidgets import (
    QDockWidget,
    QMainWindow,
    QPlainTextEdit,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from live_search.controllers.live_search_controller import LiveSearchController
from live_search.core.keybindings import (
    ACTION_START,
    KEYBINDING_ACTIONS,
    find_conflicts,
    qkeysequence_for_action,
)
from live_search.services.source_provider import Source, eligible_sources
from live_search.settings_models import SettingsPaths
from live_search.settings_store import JsonSettingsStore, SettingsStoreError
from live_search.ui.text_offsets import to_qt_position
from live_search.ui.widgets.live_search_results import LiveSearchResultsWidget
from live_search.ui.widgets.query_pane import QueryPane

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutToken:
    state: QByteArray
    search_dock_visible: bool


class SourceEditor(QPlainTextEdit):
    def __init__(self, file_path: str | None = None, text: str = "", parent=None):
        super().__init__(parent)
        self.file_path = file_path
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setPlainText(text)
        self.document().setModified(False)

    def display_name(self) -> str:
        return os.path.basename(self.file_path) if self.file_path else "untitled"

    def as_source(self) -> Source:
        return Source(
            source_id=self.file_path,
            read_content=self.toPlainText,
            persistent=bool(self.file_path),
        )


class LiveSearchWindow(QMainWindow):
    APP_NAME = "Live Search"

    SEARCH_TOGGLES = (
        ("search.case_sensitive", "Case Sensitive"),
        ("search.use_regex", "Use Regex"),
        ("search.whole_word", "Whole Word"),
    )

    def __init__(self, *, settings: JsonSettingsStore | None = None, parent=None):
        super().__init__(parent)
        self.setObjectName("LiveSearchWindow")
        self.setWindowTitle(self.APP_NAME)
        self.resize(1100, 720)
        if settings is None:
            settings = JsonSettingsStore(SettingsPaths.default().settings_file, persistent=False)
            settings.load()
        self.settings = settings

        self.tabs = QTabWidget(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setDocumentMode(True)
        self.tabs.tabCloseRequested.connect(self._close_tab)
        self.setCentralWidget(self.tabs)

        self.query_pane = QueryPane(self)
        self._results_widget: LiveSearchResultsWidget | None = None

        self._search_host = QWidget(self)
        self._search_layout = QVBoxLayout(self._search_host)
        self._search_layout.setContentsMargins(4, 4, 4, 4)
        self._search_layout.addWidget(self.query_pane)

        self.search_dock = QDockWidget("Live Search", self)
        self.search_dock.setObjectName("LiveSearchDock")
        self.search_dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.RightDockWidgetArea)
        self.search_dock.setFeatures(QDockWidget.DockWidgetMovable | QDockWidget.DockWidgetFloatable)
        self.search_dock.setWidget(self._search_host)
        self.addDockWidget(Qt.BottomDockWidgetArea, self.search_dock)
        self.search_dock.hide()

        self.controller = LiveSearchController(self, options=settings.search_options(), parent=self)
        self._install_actions()

    def _install_actions(self) -> None:
        keybindings = self.settings.get("keybindings")
        for conflict in find_conflicts(keybindings):
            logger.warning(
                "Keybinding %s for '%s' is already bound to another live search action.",
                conflict.sequence_text,
                conflict.action_name,
            )

        commands = self.controller.commands()
        menu = self.menuBar().addMenu("&Search")
        for spec in KEYBINDING_ACTIONS:
            handler = commands.get(spec.action_id)
            if handler is None:
                continue
            action = QAction(spec.action_name, self)
            action.setShortcut(qkeysequence_for_action(keybindings, spec.action_id))
            action.triggered.connect(lambda _checked=False, fn=handler: fn())
            if spec.action_id == ACTION_START:
                action.setShortcutContext(Qt.WindowShortcut)
                menu.addAction(action)
                self.addAction(action)
            else:
                # Session commands only fire while focus is inside the search dock.
                action.setShortcutContext(Qt.WidgetWithChildrenShortcut)
                self.search_dock.addAction(action)

        menu.addSeparator()
        self.toggle_actions: dict[str, QAction] = {}
        for key, label in self.SEARCH_TOGGLES:
            action = QAction(label, self)
            action.setCheckable(True)
            action.setChecked(bool(self.settings.get(key)))
            action.toggled.connect(lambda checked, setting_key=key: self.set_search_option(setting_key, checked))
            menu.addAction(action)
            self.toggle_actions[key] = action

    def set_search_option(self, key: str, value: bool) -> None:
        if not self.settings.set(key, bool(value)):
            return
        try:
            self.settings.save()
        except SettingsStoreError as exc:
            logger.warning("%s", exc)
            self.statusBar().showMessage(str(exc), 3200)
        self.controller.options = self.settings.search_options()
        self.controller.refresh()

    # Editor tabs ---------------------------------------------------------

    def open_file(self, path: str | Path) -> SourceEditor | None:
        file_path = os.path.abspath(os.path.expanduser(str(path)))
        existing = self.editor_for_path(file_path)
        if existing is not None:
            self.tabs.setCurrentWidget(existing)
            return existing
        try:
            text = Path(file_path).read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            logger.warning("Could not open %s: %s", file_path, exc)
            self.statusBar().showMessage(f"Could not open {file_path}: {exc}", 3200)
            return None
        return self.add_editor(SourceEditor(file_path, text, self.tabs))

    def new_scratch(self, text: str = "") -> SourceEditor:
        return self.add_editor(SourceEditor(None, text, self.tabs))

    def add_editor(self, editor: SourceEditor) -> SourceEditor:
        index = self.tabs.addTab(editor, editor.display_name())
        if editor.file_path:
            self.tabs.setTabToolTip(index, editor.file_path)
        self.tabs.setCurrentIndex(index)
        return editor

    def editors(self) -> list[SourceEditor]:
        found: list[SourceEditor] = []
        for index in range(self.tabs.count()):
            widget = self.tabs.widget(index)
            if isinstance(widget, SourceEditor):
                found.append(widget)
        return found

    def editor_for_path(self, file_path: str) -> SourceEditor | None:
        for editor in self.editors():
            if editor.file_path == file_path:
                return editor
        return None

    def _close_tab(self, index: int) -> None:
        widget = self.tabs.widget(index)
        self.tabs.removeTab(index)
        if widget is not None:
            widget.deleteLater()

    # Live search host capabilities ---------------------------------------

    def list_eligible_sources(self, excluded_ids: Iterable[str]) -> list[Source]:
        return eligible_sources((editor.as_source() for editor in self.editors()), excluded_ids)

    def acquire_query_surface(self) -> QueryPane:
        return self.query_pane

    def acquire_results_surface(self) -> tuple[LiveSearchResultsWidget, bool]:
        results = LiveSearchResultsWidget(self._search_host)
        results.linkClicked.connect(self.controller.activate_at)
        results.disposed.connect(lambda: self._forget_results_widget(results))
        self._search_layout.addWidget(results, 1)
        self._results_widget = results
        self.search_dock.show()
        self.search_dock.raise_()
        return results, True

    def _forget_results_widget(self, results: LiveSearchResultsWidget) -> None:
        self._search_layout.removeWidget(results)
        if self._results_widget is results:
            self._results_widget = None

    def set_cursor(self, surface: LiveSearchResultsWidget, offset: int) -> None:
        surface.set_cursor_offset(offset)

    def open_source_at(self, source_id: str, offset: int) -> None:
        editor = self.editor_for_path(source_id) or self.open_file(source_id)
        if editor is None:
            return
        self.tabs.setCurrentWidget(editor)
        cursor = QTextCursor(editor.document())
        cursor.setPosition(to_qt_position(editor.toPlainText(), offset))
        editor.setTextCursor(cursor)
        editor.ensureCursorVisible()
        editor.setFocus()

    def capture_layout(self) -> LayoutToken:
        return LayoutToken(state=self.saveState(), search_dock_visible=self.search_dock.isVisible())

    def restore_layout(self, token: LayoutToken) -> None:
        if not isinstance(token, LayoutToken):
            return
        self.restoreState(token.state)
        self.search_dock.setVisible(token.search_dock_visible)

    def show_status(self, text: str) -> None:
        message = str(text or "")
        if message:
            self.statusBar().showMessage(message)
        else:
            self.statusBar().clearMessage()
