from live_search.services.query_watcher import QueryWatcher, Subscription


class _Text:
    def __init__(self):
        self.value = ""

    def __call__(self):
        return self.value


def test_recompute_only_on_change():
    text = _Text()
    applied = []
    watcher = QueryWatcher(text, applied.append)

    text.value = "foo"
    assert watcher.on_text_changed()
    assert not watcher.on_text_changed()
    text.value = "fo"
    assert watcher.on_text_changed()
    assert applied == ["foo", "fo"]
    assert watcher.last_applied == "fo"


def test_force_recomputes_unchanged_text():
    text = _Text()
    applied = []
    watcher = QueryWatcher(text, applied.append)
    text.value = "foo"
    watcher.on_text_changed()
    assert watcher.on_text_changed(force=True)
    assert applied == ["foo", "foo"]


def test_subscription_cancel_is_idempotent():
    calls = []
    subscription = Subscription(lambda: calls.append("cancelled"))
    assert subscription.active
    subscription.cancel()
    subscription.cancel()
    assert calls == ["cancelled"]
    assert not subscription.active


def test_attach_forwards_forced_flag(make_host):
    surface = make_host().query_surface
    applied = []
    watcher = QueryWatcher(surface.read_current_text, applied.append)
    subscription = watcher.attach(surface)

    surface.type("foo")
    surface.type("foo")
    surface.type("foo", forced=True)
    assert applied == ["foo", "foo"]

    subscription.cancel()
    surface.type("bar")
    assert applied == ["foo", "foo"]
    assert surface.listener_count == 0
