"""Translate prompt_toolkit key presses into console key events."""

from __future__ import annotations

from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from devconsole.core.activation import KeyEvent

_NAMED_KEYS: dict[str, KeyEvent] = {
    Keys.Up: KeyEvent("ArrowUp", "ArrowUp"),
    Keys.Down: KeyEvent("ArrowDown", "ArrowDown"),
    Keys.Left: KeyEvent("ArrowLeft", "ArrowLeft"),
    Keys.Right: KeyEvent("ArrowRight", "ArrowRight"),
    Keys.Escape: KeyEvent("Escape", "Escape"),
    Keys.Enter: KeyEvent("Enter", "Enter"),
    Keys.Tab: KeyEvent("Tab", "Tab"),
    Keys.Backspace: KeyEvent("Backspace", "Backspace"),
    Keys.Delete: KeyEvent("Delete", "Delete"),
}


def key_event_for(key: str) -> KeyEvent | None:
    """Map a prompt_toolkit key (a ``Keys`` member or a character) to DOM-style codes."""
    named = _NAMED_KEYS.get(key)
    if named is not None:
        return named
    if len(key) != 1:
        return None
    if key.isascii() and key.isalpha():
        return KeyEvent(f"Key{key.upper()}", key)
    if key.isdigit():
        return KeyEvent(f"Digit{key}", key)
    if key == " ":
        return KeyEvent("Space", key)
    return KeyEvent(key, key)


def to_key_event(key_press: KeyPress) -> KeyEvent | None:
    return key_event_for(key_press.key)
