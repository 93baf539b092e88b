"""
A single editing session: the current tab, the active instrument, and the
named tab library.

The session turns input events into editor operations and hands the new state
to the storage after every change to content, name, or library.
"""

import logging
from pathlib import Path

import config
from . import editor
from . import export
from . import keymap
from . import library
from . import model

logger = logging.getLogger(__name__)


class EditorSession:
    """Host-side state for editing one tab."""

    def __init__(self, storage=None, device_class: str = config.WIDE,
                 instrument: str = config.GUITAR):
        if instrument not in config.INSTRUMENTS:
            raise ValueError(f"Unknown instrument: {instrument}")

        self.storage = storage
        self.device_class = device_class
        self.instrument = instrument

        if storage is not None:
            # Defaults are generated at the session's row width
            storage.device_class = device_class
            state = storage.load()
        else:
            state = model.new_state(device_class)
        self.tab_data = state["tab_data"]
        self.tab_name = state["tab_name"]
        self.saved_tabs = state["saved_tabs"]

        self._handlers = {
            keymap.ROW_ADD: self.add_row,
            keymap.ROW_DELETE: self.delete_last_row,
            keymap.RAW_EDIT: self.raw_edit,
            keymap.INSTRUMENT_TOGGLE: self.toggle_instrument,
            keymap.TITLE_EDIT: self.edit_title,
            keymap.NAME_EDIT: self.edit_name,
            keymap.RESET: self.reset,
            keymap.COPY: self.copy,
            keymap.DOWNLOAD: self.download,
            keymap.SAVE_NAMED: self.save_named,
            keymap.LOAD_NAMED: self.load_named,
            keymap.DELETE_NAMED: self.delete_named,
        }

    # -------------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------------

    @property
    def part(self) -> dict:
        """The active instrument's part."""
        return self.tab_data[self.instrument]

    @property
    def content(self) -> str:
        return self.part["content"]

    @property
    def title(self) -> str:
        return self.part["title"]

    def editor(self) -> editor.TabBlockEditor:
        """Editor over the active part's content."""
        return editor.TabBlockEditor(self.content, self.instrument, self.device_class)

    def state(self) -> dict:
        return {
            "tab_data": self.tab_data,
            "tab_name": self.tab_name,
            "saved_tabs": self.saved_tabs,
        }

    def _persist(self):
        if self.storage is not None:
            self.storage.save(self.state())

    def _set_content(self, content: str):
        self.part["content"] = content
        self._persist()

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def handle(self, command: str, arg=None):
        """
        Dispatch an input event by command name.

        Commands that take text (raw edit, title, name, load, delete) read it
        from arg. Returns whatever the underlying operation returns.
        """
        if command not in keymap.COMMANDS:
            raise ValueError(f"Unknown command: {command}")
        handler = self._handlers[command]
        if arg is None:
            if command in keymap.TEXT_COMMANDS:
                raise ValueError(f"Command {command} requires text")
            return handler()
        return handler(arg)

    def handle_key(self, key: str, shift: bool = False, ctrl: bool = False) -> bool:
        """
        Run the command bound to a key press, if any.

        Returns True when the key was consumed (default action suppressed).
        """
        command, suppress = keymap.classify_key(key, shift, ctrl, self.device_class)
        if command is not None:
            self.handle(command)
        return suppress

    def add_row(self) -> str:
        ed = self.editor()
        self._set_content(ed.add_row())
        return self.content

    def delete_last_row(self) -> str:
        ed = self.editor()
        before = self.content
        content = ed.delete_last_row()
        if content != before:
            self._set_content(content)
        return self.content

    def raw_edit(self, text: str) -> str:
        self._set_content(editor.apply_raw_edit(text))
        return self.content

    def reset(self) -> str:
        ed = self.editor()
        self._set_content(ed.reset())
        return self.content

    def toggle_instrument(self) -> str:
        """Switch the active instrument. Content is not touched or saved."""
        self.instrument = model.toggle_instrument(self.instrument)
        return self.instrument

    def edit_title(self, title: str) -> str:
        self.part["title"] = title
        self._persist()
        return title

    def edit_name(self, name: str) -> str:
        self.tab_name = name
        self._persist()
        return name

    def copy(self) -> str:
        """Text for the clipboard (active part only)."""
        return export.clipboard_text(self.tab_data, self.instrument)

    def download(self, out_dir: Path = None) -> Path:
        path = export.write_download(self.tab_name, self.tab_data, out_dir)
        logger.info(f"Downloaded '{self.tab_name}' to {path}")
        return path

    def save_named(self) -> str:
        self.saved_tabs = library.save_named(self.saved_tabs, self.tab_name, self.tab_data)
        self._persist()
        logger.info(f"Saved tab '{self.tab_name}'")
        return self.tab_name

    def load_named(self, name: str) -> bool:
        """
        Make a saved tab current.

        Returns False (and changes nothing) if no tab with that name exists.
        """
        data = library.load_named(self.saved_tabs, name)
        if data is None:
            logger.info(f"No saved tab named '{name}'")
            return False
        self.tab_data = data
        self.tab_name = name
        self._persist()
        logger.info(f"Loaded tab '{name}'")
        return True

    def delete_named(self, name: str) -> bool:
        """Remove a saved tab. Returns True if one was removed."""
        if name not in self.saved_tabs:
            return False
        self.saved_tabs = library.delete_named(self.saved_tabs, name)
        self._persist()
        logger.info(f"Deleted saved tab '{name}'")
        return True
