from __future__ import annotations

from PySide6.QtCore import QPoint, Qt, Signal
from PySide6.QtGui import QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from live_search.services.result_renderer import RenderLink
from live_search.ui.text_offsets import from_qt_position, to_qt_position


class LiveSearchResultsWidget(QPlainTextEdit):
    """Read-only results document; clicking a link reports its offset.

    Offsets exchanged with the controller are Python string indices into the
    rendered document, converted to Qt positions at this boundary.
    """

    linkClicked = Signal(int)
    disposed = Signal()

    SURFACE_ID = "*live-search-results*"

    def __init__(self, parent=None):
        super().__init__(parent)
        self.surface_id = self.SURFACE_ID
        self._document_text = ""
        self._links: tuple[RenderLink, ...] = ()
        self.setReadOnly(True)
        self.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setUndoRedoEnabled(False)
        self.viewport().setCursor(Qt.CursorShape.PointingHandCursor)

    def links(self) -> tuple[RenderLink, ...]:
        return self._links

    def show_document(self, document: str, links: tuple[RenderLink, ...]) -> None:
        # The whole document is replaced; read-only is restored afterwards.
        self._document_text = str(document or "")
        self.setReadOnly(False)
        self.setPlainText(self._document_text)
        self.setReadOnly(True)
        self._links = tuple(links)
        self._highlight_links()

    def _highlight_links(self) -> None:
        fmt = QTextCharFormat()
        fmt.setFontUnderline(True)
        fmt.setForeground(self.palette().link())
        selections: list[QTextEdit.ExtraSelection] = []
        for link in self._links:
            selection = QTextEdit.ExtraSelection()
            cursor = QTextCursor(self.document())
            cursor.setPosition(to_qt_position(self._document_text, link.link_start))
            cursor.setPosition(
                to_qt_position(self._document_text, link.link_end),
                QTextCursor.MoveMode.KeepAnchor,
            )
            selection.cursor = cursor
            selection.format = fmt
            selections.append(selection)
        self.setExtraSelections(selections)

    def set_cursor_offset(self, offset: int) -> None:
        cursor = self.textCursor()
        cursor.setPosition(to_qt_position(self._document_text, offset))
        self.setTextCursor(cursor)
        self.ensureCursorVisible()

    def cursor_offset(self) -> int:
        return from_qt_position(self._document_text, self.textCursor().position())

    def offset_at(self, point: QPoint) -> int:
        """String index of the character drawn under ``point`` (viewport coordinates)."""
        cursor = self.cursorForPosition(point)
        # cursorForPosition snaps to the nearest gap; step back when the
        # point lies on the right half of the preceding character.
        if not cursor.atBlockStart() and point.x() < self.cursorRect(cursor).x():
            cursor.movePosition(QTextCursor.MoveOperation.PreviousCharacter)
        return from_qt_position(self._document_text, cursor.position())

    def mouseReleaseEvent(self, event) -> None:
        super().mouseReleaseEvent(event)
        if event.button() != Qt.MouseButton.LeftButton:
            return
        if self.textCursor().hasSelection():
            return
        self.linkClicked.emit(self.offset_at(event.position().toPoint()))

    def dispose(self) -> None:
        self._links = ()
        self.disposed.emit()
        self.deleteLater()
