"""Search engine: query compilation and first-match scanning."""

import pytest

from live_search.services.live_search_service import (
    PatternCompileError,
    compile_query,
    find_first_match,
    search,
)
from live_search.services.source_provider import Source, SourceUnavailable, text_source
from live_search.settings_models import SearchOptions


def test_first_match_per_source_in_provider_order(abc_sources):
    results = search(compile_query("foo"), abc_sources)

    assert [m.source_id for m in results] == ["A", "C"]
    assert results[0].match_start == 0
    assert results[1].match_start == 4
    assert len(results) == 2


def test_only_first_occurrence_is_reported():
    results = search(compile_query("foo"), [text_source("A", "foo bar foo")])
    assert len(results) == 1
    assert results[0].match_start == 0
    assert results[0].match_end == 3


def test_result_count_bounded_by_sources(abc_sources):
    for query in ("foo", "o", "zzz", "nothing", "[a-z]"):
        results = search(compile_query(query), abc_sources)
        assert len(results) <= len(abc_sources)

    every = search(compile_query("o"), abc_sources)
    assert len(every) == len(abc_sources)


def test_snippet_runs_from_line_start_to_context_after_match():
    content = "first line\nsecond foo line with a long tail of text\nthird"
    match = find_first_match(compile_query("foo").pattern, "X", content, context_chars=20)

    line_start = content.index("second")
    assert match.match_start == content.index("foo")
    assert match.snippet == content[line_start : match.match_end + 20]
    assert match.link_offset == match.match_start - line_start
    assert match.snippet[match.link_offset : match.link_offset + match.link_length] == "foo"


def test_snippet_is_clipped_to_content_end():
    match = find_first_match(compile_query("end").pattern, "X", "the end")
    assert match.snippet == "the end"
    assert match.link_offset == 4
    assert match.link_length == 3


def test_zero_width_matches_are_skipped():
    match = find_first_match(compile_query("x*").pattern, "X", "abc xx")
    assert match.match_start == 4
    assert match.link_length == 2


def test_empty_query_searches_nothing(abc_sources):
    query = compile_query("")
    assert query.is_empty
    assert len(search(query, abc_sources)) == 0


def test_invalid_pattern_raises_before_reading_sources():
    reads = []

    def _read():
        reads.append(True)
        return "text"

    query = compile_query("foo(")
    assert not query.is_valid
    with pytest.raises(PatternCompileError) as excinfo:
        search(query, [Source("A", _read)])
    assert excinfo.value.query_text == "foo("
    assert reads == []


def test_unreadable_source_is_skipped():
    def _vanished():
        raise SourceUnavailable("gone")

    def _io_error():
        raise OSError("disk error")

    sources = [
        Source("A", _vanished),
        Source("B", _io_error),
        text_source("C", "foo"),
    ]
    results = search(compile_query("foo"), sources)
    assert [m.source_id for m in results] == ["C"]


def test_duplicate_source_ids_are_scanned_once():
    sources = [text_source("A", "foo"), text_source("A", "foo foo")]
    assert len(search(compile_query("foo"), sources)) == 1


def test_literal_and_case_options():
    literal = SearchOptions(use_regex=False)
    assert compile_query("a.c", literal).pattern.search("abc") is None
    assert compile_query("a.c", literal).pattern.search("a.c") is not None

    folded = SearchOptions(case_sensitive=False)
    assert compile_query("FOO", folded).pattern.search("xfoo") is not None
    assert compile_query("FOO").pattern.search("xfoo") is None

    whole = SearchOptions(whole_word=True)
    assert compile_query("foo", whole).pattern.search("foobar") is None
    assert compile_query("foo", whole).pattern.search("a foo b") is not None


def test_recompute_is_idempotent(abc_sources):
    first = search(compile_query("foo"), abc_sources)
    second = search(compile_query("foo"), abc_sources)
    assert first == second
    assert first[0] is not second[0]
