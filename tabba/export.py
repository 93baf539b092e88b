"""
Plain-text export of a tab.
"""

import re
from pathlib import Path

import config


def download_text(tab_name: str, tab_data: dict) -> str:
    """
    Build the downloadable text for a tab.

    Layout: tab name, blank line, then each part's "{title}:" line followed
    by its content, parts separated by a blank line (guitar first).
    """
    sections = [tab_name]
    for instrument in config.INSTRUMENTS:
        part = tab_data[instrument]
        sections.append(f"{part['title']}:\n{part['content']}")
    return "\n\n".join(sections)


def download_filename(tab_name: str) -> str:
    """File name for a tab: whitespace runs become underscores, plus .txt."""
    return re.sub(r'\s+', '_', tab_name) + ".txt"


def write_download(tab_name: str, tab_data: dict, out_dir: Path = None) -> Path:
    """
    Write the tab's text export into a directory.

    Path separators in the tab name are replaced so the file always lands
    directly in out_dir. Returns the written path.
    """
    out_dir = Path(out_dir or config.DOWNLOAD_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    filename = re.sub(r'[/\\]', '_', download_filename(tab_name))
    path = out_dir / filename
    path.write_text(download_text(tab_name, tab_data), encoding="utf-8")
    return path


def clipboard_text(tab_data: dict, instrument: str) -> str:
    """Text copied to the clipboard: the active part's content only."""
    return tab_data[instrument]["content"]
