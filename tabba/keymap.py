"""
Key handling: which key presses become editor commands.

Only wide (desktop-class) devices intercept keys. Narrow devices use
on-screen buttons, so every key press passes through to the text.
"""

import re

import config
from . import rows

# =============================================================================
# COMMANDS
# =============================================================================

ROW_ADD = "row_add"
ROW_DELETE = "row_delete"
RAW_EDIT = "raw_edit"
INSTRUMENT_TOGGLE = "instrument_toggle"
TITLE_EDIT = "title_edit"
NAME_EDIT = "name_edit"
RESET = "reset"
COPY = "copy"
DOWNLOAD = "download"
SAVE_NAMED = "save_named"
LOAD_NAMED = "load_named"
DELETE_NAMED = "delete_named"

COMMANDS = [
    ROW_ADD, ROW_DELETE, RAW_EDIT, INSTRUMENT_TOGGLE, TITLE_EDIT, NAME_EDIT,
    RESET, COPY, DOWNLOAD, SAVE_NAMED, LOAD_NAMED, DELETE_NAMED,
]

# Commands that need text to act on
TEXT_COMMANDS = {RAW_EDIT, TITLE_EDIT, NAME_EDIT, LOAD_NAMED, DELETE_NAMED}

# Keys that can carry a command
COMMAND_KEYS = {"enter", "backspace"}

MOBILE_USER_AGENT = re.compile(r'Mobi|Android', re.IGNORECASE)


def classify_key(key: str, shift: bool = False, ctrl: bool = False,
                 device_class: str = config.WIDE) -> tuple[str | None, bool]:
    """
    Map a key press to a command.

    Returns (command, suppress_default). command is None when the key should
    reach the text as typed (including Shift+Enter line breaks).
    """
    if device_class == config.NARROW:
        return None, False

    if key == "Enter":
        if shift:
            return None, False
        return ROW_ADD, True

    if key == "Backspace" and ctrl:
        return ROW_DELETE, True

    return None, False


def is_key_chord(text: str) -> bool:
    """Check whether text names a command key, alone or with modifiers."""
    return text.split("+")[-1].strip().lower() in COMMAND_KEYS


def parse_key_chord(chord: str) -> tuple[str, bool, bool]:
    """
    Parse a chord like "Ctrl+Backspace" or "shift+enter".

    Returns (key, shift, ctrl) with the key name capitalized.
    """
    parts = [p.strip().lower() for p in chord.split("+") if p.strip()]
    if not parts:
        raise ValueError(f"Empty key chord: {chord!r}")

    *modifiers, key = parts
    unknown = set(modifiers) - {"shift", "ctrl"}
    if unknown:
        raise ValueError(f"Unknown modifier(s) in {chord!r}: {', '.join(sorted(unknown))}")

    return key.capitalize(), "shift" in modifiers, "ctrl" in modifiers


def device_class_for_user_agent(user_agent: str) -> str:
    """Narrow for mobile browsers, wide for everything else."""
    if user_agent and MOBILE_USER_AGENT.search(user_agent):
        return config.NARROW
    return config.WIDE


def shortcuts_help(instrument: str, device_class: str = config.WIDE) -> list[str]:
    """Keyboard shortcut descriptions (none on narrow devices)."""
    if device_class == config.NARROW:
        return []
    return [
        f"Enter - Add new tab row ({rows.string_count(instrument)} strings)",
        "Shift + Enter - Manual line break",
        "Ctrl + Backspace - Delete last tab row",
    ]
