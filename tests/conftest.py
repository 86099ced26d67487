import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from live_search.services.query_watcher import Subscription
from live_search.services.source_provider import StaticSourceProvider, text_source


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


class FakeQuerySurface:
    surface_id = "*query*"

    def __init__(self):
        self.text = ""
        self._callbacks = []
        self.focused = False

    def read_current_text(self):
        return self.text

    def connect_text_changed(self, callback):
        self._callbacks.append(callback)
        return Subscription(lambda: self._callbacks.remove(callback))

    def clear(self):
        self.text = ""

    def focus(self):
        self.focused = True

    def type(self, text, forced=False):
        self.text = text
        for callback in list(self._callbacks):
            callback(text, forced)

    @property
    def listener_count(self):
        return len(self._callbacks)


class FakeResultsSurface:
    surface_id = "*results*"

    def __init__(self):
        self.document = ""
        self.links = ()
        self.cursor = None
        self.visible = False
        self.disposed = False
        self.render_count = 0

    def show_document(self, document, links):
        self.document = document
        self.links = links
        self.render_count += 1

    def set_cursor_offset(self, offset):
        self.cursor = offset

    def show(self):
        self.visible = True

    def hide(self):
        self.visible = False

    def dispose(self):
        self.disposed = True
        self.visible = False


class FakeHost:
    def __init__(self, sources=()):
        self.provider = StaticSourceProvider(sources)
        self.query_surface = FakeQuerySurface()
        self.results_surfaces = []
        self.reuse_results_surface = False
        self.opened = []
        self.layout = "layout-0"
        self.restored = []
        self.status = ""

    def list_eligible_sources(self, excluded_ids):
        return self.provider.list_eligible_sources(excluded_ids)

    def acquire_query_surface(self):
        return self.query_surface

    def acquire_results_surface(self):
        if self.reuse_results_surface and self.results_surfaces:
            return self.results_surfaces[-1], False
        surface = FakeResultsSurface()
        self.results_surfaces.append(surface)
        return surface, True

    @property
    def results_surface(self):
        return self.results_surfaces[-1]

    def set_cursor(self, surface, offset):
        surface.set_cursor_offset(offset)

    def open_source_at(self, source_id, offset):
        self.opened.append((source_id, offset))

    def capture_layout(self):
        return self.layout

    def restore_layout(self, token):
        self.restored.append(token)
        self.layout = token

    def show_status(self, text):
        self.status = text


@pytest.fixture
def abc_sources():
    return [
        text_source("A", "foo bar foo"),
        text_source("B", "no match here"),
        text_source("C", "zzz foo zzz"),
    ]


@pytest.fixture
def host(abc_sources):
    return FakeHost(abc_sources)


@pytest.fixture
def make_host():
    return FakeHost
