"""
Persistence of editor state in a string-keyed key-value store.

Three independent keys are used: the current tab data (JSON), the current
tab name (plain string), and the named tab library (JSON). Any key that is
missing or can't be read falls back to its default.
"""

import json
import logging
from pathlib import Path

import config
from . import model

logger = logging.getLogger(__name__)


class MemoryStore:
    """Key-value store held in memory (nothing survives the process)."""

    def __init__(self, items: dict = None):
        self.items = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str):
        self.items[key] = value

    def remove_item(self, key: str):
        self.items.pop(key, None)


class JsonFileStore:
    """
    Key-value store backed by a single JSON object file.

    The file is read on every access and rewritten atomically on every write.
    """

    def __init__(self, path: Path = None):
        self.path = Path(path or config.STATE_FILE)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            items = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            corrupt_path = self.path.with_suffix(self.path.suffix + ".corrupt")
            logger.warning(f"State file corrupted ({e}), starting fresh. "
                           f"Old file moved to {corrupt_path}")
            self.path.replace(corrupt_path)
            return {}
        if not isinstance(items, dict):
            logger.warning(f"State file {self.path} is not a JSON object, ignoring it")
            return {}
        return items

    def _write(self, items: dict):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        temp_path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        temp_path.replace(self.path)  # Atomic on POSIX

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str):
        items = self._read()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str):
        items = self._read()
        if key in items:
            del items[key]
            self._write(items)


class TabStorage:
    """Loads and saves editor state through a key-value store."""

    def __init__(self, store=None, device_class: str = config.WIDE):
        self.store = store if store is not None else JsonFileStore()
        self.device_class = device_class

    def _load_json(self, key: str):
        raw = self.store.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored value for '{key}' is corrupted ({e}), using default")
            return None

    def load(self) -> dict:
        """
        Load the saved state.

        Returns a dict with:
            - tab_data: {"guitar": part, "bass": part}
            - tab_name: str
            - saved_tabs: {name: tab data}
        """
        state = model.new_state(self.device_class)

        tab_data = self._load_json(config.TAB_DATA_KEY)
        if model.is_tab_data(tab_data):
            state["tab_data"] = model.copy_tab_data(tab_data)
        elif tab_data is not None:
            logger.warning(f"Stored '{config.TAB_DATA_KEY}' has an unexpected shape, using default")

        tab_name = self.store.get_item(config.TAB_NAME_KEY)
        if tab_name:
            state["tab_name"] = tab_name

        saved_tabs = self._load_json(config.SAVED_TABS_KEY)
        if isinstance(saved_tabs, dict):
            # Drop entries that can't be loaded rather than the whole library
            state["saved_tabs"] = {
                name: model.copy_tab_data(data)
                for name, data in saved_tabs.items()
                if model.is_tab_data(data)
            }
            skipped = len(saved_tabs) - len(state["saved_tabs"])
            if skipped:
                logger.warning(f"Skipped {skipped} malformed saved tab(s)")
        elif saved_tabs is not None:
            logger.warning(f"Stored '{config.SAVED_TABS_KEY}' has an unexpected shape, using default")

        return state

    def save(self, state: dict) -> bool:
        """
        Save the state. Best effort: failures are logged, not raised.

        Returns True if all keys were written.
        """
        try:
            self.store.set_item(config.TAB_DATA_KEY, json.dumps(state["tab_data"]))
            self.store.set_item(config.TAB_NAME_KEY, state["tab_name"])
            self.store.set_item(config.SAVED_TABS_KEY, json.dumps(state["saved_tabs"]))
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save state: {e}")
            return False
        return True
