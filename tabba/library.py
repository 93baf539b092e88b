"""
Named tab library: snapshots of tab data saved under a tab name.

Libraries are dicts of name -> tab data. Functions return new dicts rather
than mutating the one passed in, and every stored or loaded entry is a copy.
"""

from . import model


def save_named(saved_tabs: dict, name: str, tab_data: dict) -> dict:
    """Save a copy of the tab data under a name, replacing any entry with that name."""
    library = dict(saved_tabs)
    library[name] = model.copy_tab_data(tab_data)
    return library


def load_named(saved_tabs: dict, name: str) -> dict | None:
    """
    Get a copy of a saved tab.

    Returns None if no tab with that name exists.
    """
    data = saved_tabs.get(name)
    if data is None:
        return None
    return model.copy_tab_data(data)


def delete_named(saved_tabs: dict, name: str) -> dict:
    """Remove a saved tab. Unknown names are ignored."""
    library = dict(saved_tabs)
    library.pop(name, None)
    return library


def list_names(saved_tabs: dict) -> list[str]:
    """Saved tab names in the order they were first saved."""
    return list(saved_tabs)
