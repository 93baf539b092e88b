"""
Part, tab, and saved-state helpers.

Everything here is plain JSON-shaped data:
    part      - {"title": str, "content": str}
    tab data  - {"guitar": part, "bass": part}
    state     - {"tab_data": tab data, "tab_name": str, "saved_tabs": {name: tab data}}
"""

import copy

import config
from . import editor


def new_part(title: str, content: str) -> dict:
    """Create a part for one instrument."""
    return {"title": title, "content": content}


def default_tab_data(device_class: str = config.WIDE) -> dict:
    """Tab data with one blank row per instrument and the default titles."""
    return {
        instrument: new_part(
            config.DEFAULT_TITLES[instrument],
            editor.reset_content(instrument, device_class),
        )
        for instrument in config.INSTRUMENTS
    }


def new_state(device_class: str = config.WIDE) -> dict:
    """Editor state used when nothing has been saved yet."""
    return {
        "tab_data": default_tab_data(device_class),
        "tab_name": config.DEFAULT_TAB_NAME,
        "saved_tabs": {},
    }


def copy_tab_data(tab_data: dict) -> dict:
    """Independent copy of the guitar and bass parts (nothing else is kept)."""
    return {instrument: copy.deepcopy(tab_data[instrument]) for instrument in config.INSTRUMENTS}


def is_part(value) -> bool:
    """Check that a value looks like a part."""
    return (
        isinstance(value, dict)
        and isinstance(value.get("title"), str)
        and isinstance(value.get("content"), str)
    )


def is_tab_data(value) -> bool:
    """Check that a value has a valid part for every instrument."""
    return isinstance(value, dict) and all(is_part(value.get(i)) for i in config.INSTRUMENTS)


def toggle_instrument(instrument: str) -> str:
    """Switch between guitar and bass."""
    return config.BASS if instrument == config.GUITAR else config.GUITAR
