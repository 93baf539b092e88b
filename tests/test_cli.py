"""
Unit tests for tabs.py - interactive input handling.
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from tabs import default_device_class, run_interactive_line
from tabba.editor import count_blocks
from tabba.session import EditorSession


class TestInteractiveLine:
    """Tests for run_interactive_line()"""

    def test_enter_chord_adds_row(self, capsys):
        session = EditorSession()
        assert run_interactive_line(session, "Enter") is True
        assert count_blocks(session.content) == 2

    def test_shift_enter_inserts_line_break(self, capsys):
        session = EditorSession()
        before = session.content
        run_interactive_line(session, "Shift+Enter")
        assert session.content == before + "\n"

    def test_ctrl_backspace_deletes_row(self, capsys):
        session = EditorSession()
        run_interactive_line(session, "add")
        run_interactive_line(session, "Ctrl+Backspace")
        assert count_blocks(session.content) == 1

    def test_commands_with_text(self, capsys):
        session = EditorSession()
        run_interactive_line(session, "name Blues in A")
        run_interactive_line(session, "title Rhythm")
        assert session.tab_name == "Blues in A"
        assert session.title == "Rhythm"

    def test_load_missing_reports(self, capsys):
        session = EditorSession()
        run_interactive_line(session, "load Nothing")
        assert "Tab not found: Nothing" in capsys.readouterr().out

    def test_quit(self, capsys):
        assert run_interactive_line(EditorSession(), "quit") is False

    def test_plus_word_not_a_chord(self, capsys):
        """A word like C+G is not treated as a key chord"""
        session = EditorSession()
        before = session.content
        assert run_interactive_line(session, "C+G") is True
        out = capsys.readouterr().out
        assert "Unknown input: C+G" in out
        assert "Error" not in out
        assert session.content == before

    def test_bad_chord(self, capsys):
        session = EditorSession()
        assert run_interactive_line(session, "Alt+Enter") is True
        assert "Error" in capsys.readouterr().out


class TestDefaultDeviceClass:
    """Tests for default_device_class()"""

    def test_mobile_user_agent(self, monkeypatch):
        monkeypatch.setenv(config.USER_AGENT_ENV, "Mozilla/5.0 (Linux; Android 14) Mobile")
        assert default_device_class() == config.NARROW

    def test_unset(self, monkeypatch):
        monkeypatch.delenv(config.USER_AGENT_ENV, raising=False)
        assert default_device_class() == config.WIDE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
