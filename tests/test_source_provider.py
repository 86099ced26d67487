import pytest

from live_search.services.source_provider import (
    Source,
    SourceUnavailable,
    StaticSourceProvider,
    eligible_sources,
    file_source,
    text_source,
)


def test_eligibility_excludes_surfaces_and_anonymous_sources():
    sources = [
        text_source("a.txt", ""),
        text_source("", ""),
        text_source(None, ""),
        text_source("scratch", "", persistent=False),
        text_source("*results*", ""),
    ]
    kept = eligible_sources(sources, ["*results*"])
    assert [source.source_id for source in kept] == ["a.txt"]


def test_provider_preserves_order():
    provider = StaticSourceProvider([text_source("b", ""), text_source("a", "")])
    provider.add(text_source("c", ""))
    assert provider.remove("b")
    assert not provider.remove("missing")
    assert [s.source_id for s in provider.list_eligible_sources()] == ["a", "c"]


def test_file_source_reads_current_content(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("one", encoding="utf-8")
    source = file_source(path)
    assert source.source_id == str(path.resolve()) or source.source_id.endswith("notes.txt")
    assert source.read() == "one"

    path.write_text("two", encoding="utf-8")
    assert source.read() == "two"

    path.unlink()
    with pytest.raises(SourceUnavailable):
        source.read()


def test_non_text_content_is_unavailable():
    with pytest.raises(SourceUnavailable):
        Source("x", lambda: None).read()
