#!/usr/bin/env python3
"""
Tabba - ASCII Tab Row Editor

Write guitar and bass tabs row by row. State (current tab, tab name, and
saved tabs) is kept in a JSON file between runs.

Usage:
    python tabs.py show [--instrument bass]
    python tabs.py add-row
    python tabs.py delete-row
    python tabs.py edit --file my_riff.txt   # replace content (stdin if no file)
    python tabs.py save / load "My Tab" / delete "My Tab" / list
    python tabs.py download --output-dir exports
    python tabs.py interactive               # key-chord editing session
"""

import argparse
import logging
import os
import sys
from datetime import datetime
from pathlib import Path

import config
from tabba import keymap
from tabba import library
from tabba import rows
from tabba.session import EditorSession
from tabba.storage import JsonFileStore, TabStorage


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging():
    """Configure logging to a dated file, with warnings also on the console."""
    log_dir = Path(config.LOG_DIR)
    log_dir.mkdir(exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f"tabba_{timestamp}.log"

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            console,
        ],
    )
    return logging.getLogger(__name__)


# =============================================================================
# HELPERS
# =============================================================================

def open_session(args) -> EditorSession:
    """Load the persisted state into a session for the requested instrument."""
    storage = TabStorage(JsonFileStore(Path(args.state)), device_class=args.device)
    return EditorSession(storage, device_class=args.device, instrument=args.instrument)


def default_device_class() -> str:
    """Device class from the user agent in the environment (wide if unset)."""
    return keymap.device_class_for_user_agent(os.environ.get(config.USER_AGENT_ENV, ""))


def print_part(session: EditorSession):
    """Print the active part with its header."""
    print(f"\n{session.tab_name} - {session.title} ({session.instrument})")
    print(f"{'-' * 50}")
    print(session.content)
    print(f"{'-' * 50}")
    print(f"Rows: {session.editor().block_count}")


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_show(args):
    """Show the active part."""
    session = open_session(args)
    print_part(session)


def cmd_add_row(args):
    """Append a blank row."""
    session = open_session(args)
    session.add_row()
    print_part(session)


def cmd_delete_row(args):
    """Delete the last row (the only row is never deleted)."""
    session = open_session(args)
    before = session.editor().block_count
    session.delete_last_row()
    if session.editor().block_count == before:
        print("Only one row left, nothing deleted.")
    print_part(session)


def cmd_edit(args):
    """Replace the content with free-typed text from a file or stdin."""
    session = open_session(args)
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()
    session.raw_edit(text)
    print_part(session)


def cmd_reset(args):
    """Reset the active part to a single blank row."""
    session = open_session(args)
    session.reset()
    print_part(session)


def cmd_title(args):
    """Set the active part's title."""
    session = open_session(args)
    session.edit_title(args.title)
    print(f"Title set to: {session.title}")


def cmd_name(args):
    """Set the tab name."""
    session = open_session(args)
    session.edit_name(args.name)
    print(f"Tab name set to: {session.tab_name}")


def cmd_copy(args):
    """Print the active part's content verbatim (pipe it to your clipboard tool)."""
    session = open_session(args)
    sys.stdout.write(session.copy())
    sys.stdout.write("\n")


def cmd_download(args):
    """Write the whole tab to a .txt file."""
    session = open_session(args)
    path = session.download(Path(args.output_dir))
    print(f"Tab written to: {path}")


def cmd_save(args):
    """Save the current tab under its name."""
    session = open_session(args)
    name = session.save_named()
    print(f"Tab saved: {name}")


def cmd_load(args):
    """Load a saved tab."""
    session = open_session(args)
    if not session.load_named(args.name):
        print(f"Tab not found: {args.name}")
        print("\nSee saved tabs with: python tabs.py list")
        return
    print_part(session)


def cmd_delete(args):
    """Delete a saved tab."""
    session = open_session(args)
    if session.delete_named(args.name):
        print(f"Deleted: {args.name}")
    else:
        print(f"Tab not found: {args.name}")


def cmd_list(args):
    """List saved tabs."""
    session = open_session(args)
    names = library.list_names(session.saved_tabs)
    if not names:
        print("No saved tabs yet.")
        return
    print(f"\nSaved tabs ({len(names)}):\n")
    for name in names:
        marker = "*" if name == session.tab_name else " "
        print(f"  {marker} {name}")


def cmd_shortcuts(args):
    """Show the keyboard shortcuts for the instrument and device."""
    lines = keymap.shortcuts_help(args.instrument, args.device)
    if not lines:
        print("No keyboard shortcuts on narrow devices; use the add/delete row commands.")
        return
    print("\nKeyboard Shortcuts:")
    for line in lines:
        print(f"  {line}")


INTERACTIVE_HELP = """
Key chords:  Enter | Shift+Enter | Ctrl+Backspace
Commands:    add | del | toggle | reset | show | copy | download
             title <text> | name <text> | save | load <name> | delete <name>
             list | type (free-type until a line with only '.') | help | quit
"""


def read_typed_text() -> str:
    """Read free-typed lines until a line containing only '.'."""
    lines = []
    for line in sys.stdin:
        line = line.rstrip("\n")
        if line == ".":
            break
        lines.append(line)
    return "\n".join(lines)


def run_interactive_line(session: EditorSession, line: str) -> bool:
    """Handle one line of interactive input. Returns False to stop."""
    word, _, rest = line.strip().partition(" ")
    word_lower = word.lower()
    rest = rest.strip()

    if word_lower in ("quit", "exit", "q"):
        return False

    if keymap.is_key_chord(word):
        try:
            key, shift, ctrl = keymap.parse_key_chord(word)
        except ValueError as e:
            print(f"Error: {e}")
            return True
        if not session.handle_key(key, shift, ctrl):
            # Unbound keys act on the end of the text, as typing would
            if key == "Enter":
                session.raw_edit(session.content + "\n")
            elif key == "Backspace":
                session.raw_edit(session.content[:-1])
        print_part(session)
        return True

    simple = {
        "add": keymap.ROW_ADD,
        "del": keymap.ROW_DELETE,
        "reset": keymap.RESET,
        "save": keymap.SAVE_NAMED,
    }
    with_text = {
        "title": keymap.TITLE_EDIT,
        "name": keymap.NAME_EDIT,
        "load": keymap.LOAD_NAMED,
        "delete": keymap.DELETE_NAMED,
    }

    if word_lower in simple:
        session.handle(simple[word_lower])
        print_part(session)
    elif word_lower in with_text:
        if not rest:
            print(f"Usage: {word_lower} <text>")
            return True
        result = session.handle(with_text[word_lower], rest)
        if result is False:
            print(f"Tab not found: {rest}")
        else:
            print_part(session)
    elif word_lower == "toggle":
        session.handle(keymap.INSTRUMENT_TOGGLE)
        print_part(session)
    elif word_lower == "type":
        session.handle(keymap.RAW_EDIT, read_typed_text())
        print_part(session)
    elif word_lower == "show":
        print_part(session)
    elif word_lower == "copy":
        print(session.handle(keymap.COPY))
    elif word_lower == "download":
        path = session.handle(keymap.DOWNLOAD, Path(config.DOWNLOAD_DIR))
        print(f"Tab written to: {path}")
    elif word_lower == "list":
        names = library.list_names(session.saved_tabs)
        print("\n".join(f"  {n}" for n in names) if names else "No saved tabs yet.")
    elif word_lower == "help":
        print(INTERACTIVE_HELP)
    elif word:
        print(f"Unknown input: {word} (type 'help')")
    return True


def cmd_interactive(args):
    """Edit with key chords and commands, one per line."""
    session = open_session(args)
    print(f"Editing '{session.tab_name}' ({rows.string_count(session.instrument)} strings).")
    print(INTERACTIVE_HELP)
    print_part(session)

    while True:
        try:
            line = input("tabba> ")
        except EOFError:
            print()
            break
        if not run_interactive_line(session, line):
            break


def main():
    setup_logging()

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--instrument", "-i", choices=config.INSTRUMENTS, default=config.GUITAR,
                        help="Instrument part to edit (default: guitar)")
    common.add_argument("--device", "-d", choices=[config.WIDE, config.NARROW], default=default_device_class(),
                        help=f"Device class: wide rows (50) or narrow rows (36); default from the {config.USER_AGENT_ENV} user agent")
    common.add_argument("--state", default=config.STATE_FILE,
                        help=f"State file (default: {config.STATE_FILE})")

    parser_main = argparse.ArgumentParser(
        description="Tabba - ASCII Tab Row Editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Editing:
  show        Show the active part
  add-row     Append a blank row (labels copied from the first row)
  delete-row  Delete the last row
  edit        Replace content with free-typed text (file or stdin)
  reset       Reset the active part to one blank row
  title       Set the active part's title
  name        Set the tab name

Output:
  copy        Print the active part for the clipboard
  download    Write the whole tab to <name>.txt

Saved tabs:
  save        Save the current tab under its name
  load        Load a saved tab
  delete      Delete a saved tab
  list        List saved tabs

Examples:
  python tabs.py add-row --instrument bass
  python tabs.py title "Clean Guitar"
  python tabs.py name "Wish You Were Here"
  python tabs.py download -o exports
  python tabs.py interactive --device narrow
        """,
    )

    subparsers = parser_main.add_subparsers(dest="command", help="Command to run")

    p_show = subparsers.add_parser("show", parents=[common], help="Show the active part")
    p_show.set_defaults(func=cmd_show)

    p_add = subparsers.add_parser("add-row", parents=[common], help="Append a blank row")
    p_add.set_defaults(func=cmd_add_row)

    p_del = subparsers.add_parser("delete-row", parents=[common], help="Delete the last row")
    p_del.set_defaults(func=cmd_delete_row)

    p_edit = subparsers.add_parser("edit", parents=[common], help="Replace content with free text")
    p_edit.add_argument("--file", "-f", help="Read text from this file instead of stdin")
    p_edit.set_defaults(func=cmd_edit)

    p_reset = subparsers.add_parser("reset", parents=[common], help="Reset to one blank row")
    p_reset.set_defaults(func=cmd_reset)

    p_title = subparsers.add_parser("title", parents=[common], help="Set the part title")
    p_title.add_argument("title", help="New title (e.g. 'Clean Guitar')")
    p_title.set_defaults(func=cmd_title)

    p_name = subparsers.add_parser("name", parents=[common], help="Set the tab name")
    p_name.add_argument("name", help="New tab name")
    p_name.set_defaults(func=cmd_name)

    p_copy = subparsers.add_parser("copy", parents=[common], help="Print the active part")
    p_copy.set_defaults(func=cmd_copy)

    p_download = subparsers.add_parser("download", parents=[common], help="Write the tab to a .txt file")
    p_download.add_argument("--output-dir", "-o", default=config.DOWNLOAD_DIR,
                            help=f"Directory to write to (default: {config.DOWNLOAD_DIR})")
    p_download.set_defaults(func=cmd_download)

    p_save = subparsers.add_parser("save", parents=[common], help="Save the current tab")
    p_save.set_defaults(func=cmd_save)

    p_load = subparsers.add_parser("load", parents=[common], help="Load a saved tab")
    p_load.add_argument("name", help="Saved tab name")
    p_load.set_defaults(func=cmd_load)

    p_delete = subparsers.add_parser("delete", parents=[common], help="Delete a saved tab")
    p_delete.add_argument("name", help="Saved tab name")
    p_delete.set_defaults(func=cmd_delete)

    p_list = subparsers.add_parser("list", parents=[common], help="List saved tabs")
    p_list.set_defaults(func=cmd_list)

    p_shortcuts = subparsers.add_parser("shortcuts", parents=[common], help="Show keyboard shortcuts")
    p_shortcuts.set_defaults(func=cmd_shortcuts)

    p_interactive = subparsers.add_parser("interactive", parents=[common],
                                          help="Interactive editing with key chords")
    p_interactive.set_defaults(func=cmd_interactive)

    args = parser_main.parse_args()

    if not args.command:
        parser_main.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
