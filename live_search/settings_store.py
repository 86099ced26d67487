from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from live_search.settings_models import SearchOptions, default_settings

logger = logging.getLogger(__name__)


class SettingsStoreError(RuntimeError):
    """Raised when the settings file cannot be written."""


def deep_merge_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Fill in missing keys from defaults, keeping values the user set."""
    merged = deepcopy(dict(data))
    for key, default_value in defaults.items():
        if key not in merged:
            merged[key] = deepcopy(default_value)
            continue
        current = merged[key]
        if isinstance(current, dict) and isinstance(default_value, dict):
            merged[key] = deep_merge_defaults(current, default_value)
    return merged


def dot_get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    if not key:
        return data
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


def dot_set(data: dict[str, Any], key: str, value: Any) -> None:
    if not key:
        raise ValueError("Key cannot be empty.")
    current: dict[str, Any] = data
    parts = key.split(".")
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[parts[-1]] = value


class JsonSettingsStore:
    """Live search settings kept in one JSON file, merged over defaults."""

    def __init__(
        self,
        path: Path,
        defaults: Mapping[str, Any] | None = None,
        *,
        persistent: bool = True,
    ) -> None:
        self.path = Path(path)
        self.defaults: dict[str, Any] = deepcopy(dict(defaults if defaults is not None else default_settings()))
        self.data: dict[str, Any] = {}
        self.dirty: bool = False
        self.last_error: str | None = None
        self.persistent: bool = bool(persistent)

    def load(self) -> dict[str, Any]:
        self.last_error = None
        if not self.persistent or not self.path.exists():
            self.data = deep_merge_defaults({}, self.defaults)
            self.dirty = False
            return self.data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raw = None
            self.last_error = str(exc)
        else:
            if not isinstance(raw, dict):
                self.last_error = (
                    f"Settings root in '{self.path}' must be a JSON object, "
                    f"found {type(raw).__name__}."
                )
                raw = None

        if raw is None:
            # Keep searching usable; the broken file is left untouched.
            logger.warning("Ignoring settings file %s: %s", self.path, self.last_error)
            self.data = deep_merge_defaults({}, self.defaults)
        else:
            self.data = deep_merge_defaults(raw, self.defaults)
        self.dirty = False
        return self.data

    def save(self) -> None:
        if not self.persistent:
            self.dirty = False
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError(f"Could not write settings file '{self.path}': {exc}") from exc
        self.dirty = False
        self.last_error = None

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self.data, key, default)

    def set(self, key: str, value: Any) -> bool:
        if self.get(key) == value:
            return False
        dot_set(self.data, key, value)
        self.dirty = True
        return True

    def search_options(self) -> SearchOptions:
        return SearchOptions.from_settings(self.data)


def load_settings(path: Path | str, *, persistent: bool = True) -> JsonSettingsStore:
    store = JsonSettingsStore(Path(path).expanduser(), persistent=persistent)
    store.load()
    return store
