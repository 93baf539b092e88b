"""
Unit tests for tabba/session.py - event dispatch and persistence.
"""

import pytest
import tempfile
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from tabba import keymap
from tabba.editor import count_blocks
from tabba.rows import generate_row
from tabba.session import EditorSession
from tabba.storage import MemoryStore, TabStorage


GUITAR_ROW = generate_row(["e|", "B|", "G|", "D|", "A|", "E|"], config.WIDE)
BASS_ROW = generate_row(["G|", "D|", "A|", "E|"], config.WIDE)


class CountingStorage(TabStorage):
    """TabStorage that records how many times it was saved."""

    def __init__(self, store=None, device_class=config.WIDE):
        super().__init__(store if store is not None else MemoryStore(), device_class)
        self.saves = 0

    def save(self, state):
        self.saves += 1
        return super().save(state)


class TestRowEvents:
    """Tests for row add/delete/reset events"""

    def test_add_then_delete(self):
        session = EditorSession()
        session.handle(keymap.ROW_ADD)
        assert count_blocks(session.content) == 2
        session.handle(keymap.ROW_DELETE)
        assert session.content == GUITAR_ROW

    def test_delete_single_row_noop(self):
        storage = CountingStorage()
        session = EditorSession(storage)
        session.delete_last_row()
        assert session.content == GUITAR_ROW
        assert storage.saves == 0

    def test_reset_uses_canonical_labels(self):
        session = EditorSession(instrument="bass")
        session.raw_edit("x|----\ny|----")
        session.reset()
        assert session.content == BASS_ROW

    def test_narrow_device_rows(self):
        session = EditorSession(device_class=config.NARROW)
        session.add_row()
        assert session.content.split("\n")[-1] == "E|" + "-" * 36


class TestInstrumentToggle:
    """Tests for switching instruments"""

    def test_toggle_switches_visible_part(self):
        session = EditorSession()
        session.add_row()
        guitar_content = session.content
        session.handle(keymap.INSTRUMENT_TOGGLE)
        assert session.instrument == "bass"
        assert session.content == BASS_ROW
        session.toggle_instrument()
        assert session.content == guitar_content

    def test_toggle_not_persisted(self):
        storage = CountingStorage()
        session = EditorSession(storage)
        session.toggle_instrument()
        assert storage.saves == 0

    def test_rows_added_to_active_part_only(self):
        session = EditorSession()
        session.toggle_instrument()
        session.add_row()
        assert session.tab_data["guitar"]["content"] == GUITAR_ROW
        assert count_blocks(session.tab_data["bass"]["content"]) == 2


class TestKeys:
    """Tests for handle_key()"""

    def test_enter_adds_row_on_wide(self):
        session = EditorSession()
        assert session.handle_key("Enter") is True
        assert count_blocks(session.content) == 2

    def test_ctrl_backspace_deletes_row(self):
        session = EditorSession()
        session.add_row()
        assert session.handle_key("Backspace", ctrl=True) is True
        assert session.content == GUITAR_ROW

    def test_shift_enter_passthrough(self):
        session = EditorSession()
        assert session.handle_key("Enter", shift=True) is False
        assert session.content == GUITAR_ROW

    def test_narrow_enter_passthrough(self):
        session = EditorSession(device_class=config.NARROW)
        assert session.handle_key("Enter") is False
        assert count_blocks(session.content) == 1


class TestPersistence:
    """Tests for saving after state changes"""

    def test_changes_are_saved(self):
        store = MemoryStore()
        session = EditorSession(TabStorage(store))
        session.add_row()
        session.edit_title("Lead")
        session.edit_name("Solo")

        reloaded = EditorSession(TabStorage(store))
        assert reloaded.content == session.content
        assert reloaded.title == "Lead"
        assert reloaded.tab_name == "Solo"

    def test_every_change_saves(self):
        storage = CountingStorage()
        session = EditorSession(storage)
        session.add_row()
        session.raw_edit("text")
        session.edit_title("T")
        session.edit_name("N")
        session.reset()
        session.save_named()
        session.delete_named("N")
        assert storage.saves == 7

    def test_copy_and_download_dont_save(self):
        storage = CountingStorage()
        session = EditorSession(storage)
        with tempfile.TemporaryDirectory() as tmpdir:
            session.download(Path(tmpdir))
        session.copy()
        assert storage.saves == 0


class TestNamedTabs:
    """Tests for the saved tab library through the session"""

    def test_save_and_load(self):
        session = EditorSession()
        session.edit_name("Verse")
        session.add_row()
        session.handle(keymap.SAVE_NAMED)
        saved_content = session.content

        session.reset()
        session.edit_name("Other")
        assert session.handle(keymap.LOAD_NAMED, "Verse") is True
        assert session.tab_name == "Verse"
        assert session.content == saved_content

    def test_snapshot_by_value(self):
        session = EditorSession()
        session.save_named()
        session.add_row()
        assert session.saved_tabs["My Tab"]["guitar"]["content"] == GUITAR_ROW

    def test_load_missing_is_noop(self):
        session = EditorSession()
        session.add_row()
        content = session.content
        assert session.load_named("Missing") is False
        assert session.content == content
        assert session.tab_name == "My Tab"

    def test_delete(self):
        session = EditorSession()
        session.save_named()
        assert session.handle(keymap.DELETE_NAMED, "My Tab") is True
        assert session.saved_tabs == {}
        assert session.delete_named("My Tab") is False


class TestOutput:
    """Tests for copy and download events"""

    def test_copy_active_part(self):
        session = EditorSession(instrument="bass")
        assert session.handle(keymap.COPY) == BASS_ROW

    def test_download(self):
        session = EditorSession()
        session.edit_name("Night  Song")
        with tempfile.TemporaryDirectory() as tmpdir:
            path = session.handle(keymap.DOWNLOAD, Path(tmpdir))
            assert path.name == "Night_Song.txt"
            text = path.read_text(encoding="utf-8")
        assert text.startswith("Night  Song\n\nGuitar:\n" + GUITAR_ROW)
        assert text.endswith("\n\nBass:\n" + BASS_ROW)


class TestErrors:
    """Tests for invalid input"""

    def test_unknown_command(self):
        with pytest.raises(ValueError):
            EditorSession().handle("explode")

    def test_unknown_instrument(self):
        with pytest.raises(ValueError):
            EditorSession(instrument="drums")

    def test_text_command_without_text(self):
        """Commands that need text reject a missing argument"""
        session = EditorSession()
        for command in (keymap.RAW_EDIT, keymap.TITLE_EDIT, keymap.NAME_EDIT,
                        keymap.LOAD_NAMED, keymap.DELETE_NAMED):
            with pytest.raises(ValueError) as excinfo:
                session.handle(command)
            assert "requires text" in str(excinfo.value)

    def test_every_command_dispatches(self):
        """Each known command has a handler"""
        session = EditorSession()
        with tempfile.TemporaryDirectory() as tmpdir:
            for command in keymap.COMMANDS:
                arg = "x" if command in keymap.TEXT_COMMANDS else None
                if command == keymap.DOWNLOAD:
                    arg = Path(tmpdir)
                session.handle(command, arg)


class TestDeviceClass:
    """Tests for keeping storage defaults at the session's row width"""

    def test_defaults_follow_session_device(self):
        storage = TabStorage(MemoryStore(), config.WIDE)
        session = EditorSession(storage, device_class=config.NARROW)
        assert storage.device_class == config.NARROW
        assert session.content.split("\n")[0] == "e|" + "-" * 36

    def test_rows_match_default_width(self):
        session = EditorSession(TabStorage(MemoryStore()), device_class=config.NARROW)
        session.add_row()
        widths = {len(line) for line in session.content.split("\n") if line}
        assert widths == {2 + 36}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
