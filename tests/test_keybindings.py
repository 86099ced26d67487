from live_search.core.keybindings import (
    ACTION_ACTIVATE,
    ACTION_NEXT,
    ACTION_START,
    KEYBINDING_ACTIONS,
    KEYBINDING_SCOPE,
    canonicalize_chord_text,
    default_keybindings,
    find_conflicts,
    get_action_sequence,
    normalize_keybindings,
)


def test_defaults_cover_every_action():
    defaults = default_keybindings()[KEYBINDING_SCOPE]
    assert set(defaults) == {action.action_id for action in KEYBINDING_ACTIONS}
    assert find_conflicts(None) == []


def test_chords_are_canonicalized():
    assert canonicalize_chord_text("ctrl+alt+s") == "Ctrl+Alt+S"
    assert canonicalize_chord_text("Shift+Ctrl+x") == "Ctrl+Shift+X"
    assert canonicalize_chord_text("") == ""


def test_user_overrides_merge_with_defaults():
    merged = normalize_keybindings({KEYBINDING_SCOPE: {ACTION_NEXT: "ctrl+n", "action.unknown": ["F9"]}})
    assert merged[KEYBINDING_SCOPE][ACTION_NEXT] == ["Ctrl+N"]
    assert "action.unknown" not in merged[KEYBINDING_SCOPE]
    assert get_action_sequence(merged, ACTION_START) == ["Ctrl+Alt+S"]


def test_conflicts_are_reported():
    conflicts = find_conflicts({KEYBINDING_SCOPE: {ACTION_ACTIVATE: ["Down"]}})
    assert [conflict.action_id for conflict in conflicts] == [ACTION_ACTIVATE]
    assert conflicts[0].sequence_text == "Down"
