"""Keybindings for the live search command surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from PySide6.QtGui import QKeySequence

KEYBINDING_SCOPE = "live_search"

ACTION_START = "action.live_search_start"
ACTION_QUIT = "action.live_search_quit"
ACTION_NEXT = "action.live_search_next"
ACTION_PREV = "action.live_search_prev"
ACTION_ACTIVATE = "action.live_search_activate"
ACTION_REFRESH = "action.live_search_refresh"


@dataclass(frozen=True, slots=True)
class KeybindingAction:
    action_id: str
    action_name: str
    default_sequence: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class KeybindingConflict:
    action_id: str
    action_name: str
    sequence_text: str


KEYBINDING_ACTIONS: tuple[KeybindingAction, ...] = (
    KeybindingAction(ACTION_START, "Start Live Search", ("Ctrl+Alt+S",)),
    KeybindingAction(ACTION_QUIT, "Quit Live Search", ("Escape",)),
    KeybindingAction(ACTION_NEXT, "Next Result", ("Down",)),
    KeybindingAction(ACTION_PREV, "Previous Result", ("Up",)),
    KeybindingAction(ACTION_ACTIVATE, "Open Selected Result", ("Return",)),
    KeybindingAction(ACTION_REFRESH, "Refresh Results", ("F5",)),
)

_ACTION_BY_ID: dict[str, KeybindingAction] = {entry.action_id: entry for entry in KEYBINDING_ACTIONS}


def default_keybindings() -> dict[str, dict[str, list[str]]]:
    return {KEYBINDING_SCOPE: {action.action_id: list(action.default_sequence) for action in KEYBINDING_ACTIONS}}


def action_definition(action_id: str) -> KeybindingAction | None:
    return _ACTION_BY_ID.get(str(action_id or "").strip())


def _split_sequence_tokens(text: str) -> list[str]:
    raw = str(text or "").strip()
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _manual_canonical_chord(text: str) -> str:
    parts = [part.strip() for part in str(text or "").split("+") if part.strip()]
    modifiers: set[str] = set()
    key_token = ""
    for part in parts:
        low = part.lower()
        if low in {"ctrl", "control"}:
            modifiers.add("Ctrl")
        elif low == "alt":
            modifiers.add("Alt")
        elif low == "shift":
            modifiers.add("Shift")
        elif low in {"meta", "cmd", "command", "super", "win"}:
            modifiers.add("Meta")
        else:
            key_token = part
    if not key_token:
        return ""
    if len(key_token) == 1 and key_token.isalpha():
        key_token = key_token.upper()
    ordered = [name for name in ("Ctrl", "Alt", "Shift", "Meta") if name in modifiers]
    return "+".join([*ordered, key_token])


def canonicalize_chord_text(text: str) -> str:
    chord_text = str(text or "").strip()
    if not chord_text:
        return ""
    manual = _manual_canonical_chord(chord_text)
    normalized = QKeySequence(chord_text).toString(QKeySequence.PortableText).strip()
    if not normalized:
        return manual or chord_text
    # Only the first chord of a multi-chord sequence is kept.
    first = _split_sequence_tokens(normalized)[0] if "," in normalized else normalized
    return _manual_canonical_chord(first) or first


def normalize_sequence(value: Any) -> list[str]:
    tokens: list[str] = []
    if isinstance(value, str):
        tokens.extend(_split_sequence_tokens(value))
    elif isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, str):
                tokens.extend(_split_sequence_tokens(item))
    normalized: list[str] = []
    for token in tokens:
        chord = canonicalize_chord_text(token)
        if chord:
            normalized.append(chord)
    return normalized


def sequence_to_text(sequence: list[str] | tuple[str, ...]) -> str:
    return ", ".join(normalize_sequence(list(sequence)))


def normalize_keybindings(raw: Any) -> dict[str, dict[str, list[str]]]:
    merged = default_keybindings()
    if not isinstance(raw, Mapping):
        return merged
    scope_payload = raw.get(KEYBINDING_SCOPE)
    if not isinstance(scope_payload, Mapping):
        return merged
    scope_map = merged[KEYBINDING_SCOPE]
    for action_key, value in scope_payload.items():
        action_id = str(action_key or "").strip()
        if action_definition(action_id) is None:
            continue
        normalized = normalize_sequence(value)
        if normalized:
            scope_map[action_id] = normalized
    return merged


def get_action_sequence(keybindings: Mapping[str, Any] | None, action_id: str) -> list[str]:
    normalized = normalize_keybindings(keybindings)
    action_key = str(action_id or "").strip()
    sequence = normalized[KEYBINDING_SCOPE].get(action_key)
    if sequence:
        return list(sequence)
    spec = action_definition(action_key)
    return list(spec.default_sequence) if spec is not None else []


def qkeysequence_for_action(keybindings: Mapping[str, Any] | None, action_id: str) -> QKeySequence:
    return QKeySequence(sequence_to_text(get_action_sequence(keybindings, action_id)))


def find_conflicts(keybindings: Mapping[str, Any] | None) -> list[KeybindingConflict]:
    """Return every action whose sequence is shared with an earlier action."""
    normalized = normalize_keybindings(keybindings)
    seen: dict[str, str] = {}
    conflicts: list[KeybindingConflict] = []
    for action in KEYBINDING_ACTIONS:
        text = sequence_to_text(normalized[KEYBINDING_SCOPE].get(action.action_id, []))
        if not text:
            continue
        if text in seen:
            conflicts.append(
                KeybindingConflict(
                    action_id=action.action_id,
                    action_name=action.action_name,
                    sequence_text=text,
                )
            )
            continue
        seen[text] = action.action_id
    return conflicts


__all__ = [
    "KEYBINDING_SCOPE",
    "ACTION_START",
    "ACTION_QUIT",
    "ACTION_NEXT",
    "ACTION_PREV",
    "ACTION_ACTIVATE",
    "ACTION_REFRESH",
    "KeybindingAction",
    "KeybindingConflict",
    "KEYBINDING_ACTIONS",
    "default_keybindings",
    "action_definition",
    "canonicalize_chord_text",
    "normalize_sequence",
    "sequence_to_text",
    "normalize_keybindings",
    "get_action_sequence",
    "qkeysequence_for_action",
    "find_conflicts",
]
