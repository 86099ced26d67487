from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, TypedDict

from live_search.core.keybindings import default_keybindings

DEFAULT_CONTEXT_CHARS = 20
DEFAULT_CONTINUATION = "..."
DEFAULT_SEPARATOR = "\n"


class SearchSettings(TypedDict, total=False):
    context_chars: int
    case_sensitive: bool
    use_regex: bool
    whole_word: bool


class ResultsSettings(TypedDict, total=False):
    continuation: str
    separator: str


class LiveSearchSettings(TypedDict, total=False):
    search: SearchSettings
    results: ResultsSettings
    keybindings: dict[str, dict[str, list[str]]]


@dataclass(frozen=True)
class SettingsPaths:
    settings_file: Path
    settings_dir: Path = field(init=False)

    def __post_init__(self) -> None:
        settings_file = Path(self.settings_file).expanduser()
        object.__setattr__(self, "settings_file", settings_file)
        object.__setattr__(self, "settings_dir", settings_file.parent)

    @staticmethod
    def default() -> "SettingsPaths":
        return SettingsPaths(Path.home() / ".config" / "live_search" / "settings.json")


@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Typed view of the settings consumed by the search engine and renderer."""

    context_chars: int = DEFAULT_CONTEXT_CHARS
    case_sensitive: bool = True
    use_regex: bool = True
    whole_word: bool = False
    continuation: str = DEFAULT_CONTINUATION
    separator: str = DEFAULT_SEPARATOR

    @staticmethod
    def from_settings(data: Mapping[str, Any] | None) -> "SearchOptions":
        root = data if isinstance(data, Mapping) else {}
        search = root.get("search") if isinstance(root.get("search"), Mapping) else {}
        results = root.get("results") if isinstance(root.get("results"), Mapping) else {}
        try:
            context_chars = max(0, int(search.get("context_chars", DEFAULT_CONTEXT_CHARS)))
        except (TypeError, ValueError):
            context_chars = DEFAULT_CONTEXT_CHARS
        continuation = results.get("continuation", DEFAULT_CONTINUATION)
        separator = results.get("separator", DEFAULT_SEPARATOR)
        return SearchOptions(
            context_chars=context_chars,
            case_sensitive=bool(search.get("case_sensitive", True)),
            use_regex=bool(search.get("use_regex", True)),
            whole_word=bool(search.get("whole_word", False)),
            continuation=continuation if isinstance(continuation, str) else DEFAULT_CONTINUATION,
            # An empty separator would glue blocks together.
            separator=separator if isinstance(separator, str) and separator else DEFAULT_SEPARATOR,
        )


def default_settings() -> LiveSearchSettings:
    defaults: LiveSearchSettings = {
        "search": {
            "context_chars": DEFAULT_CONTEXT_CHARS,
            "case_sensitive": True,
            "use_regex": True,
            "whole_word": False,
        },
        "results": {
            "continuation": DEFAULT_CONTINUATION,
            "separator": DEFAULT_SEPARATOR,
        },
        "keybindings": default_keybindings(),
    }
    return deepcopy(defaults)
