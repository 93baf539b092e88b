"""
Tab content editing: blocks of string lines separated by blank lines.

Content is a single text blob. A block ("row") is a run of non-blank lines;
blocks are written with exactly one blank line between them but read with
any number of blank (or whitespace-only) lines between them.
"""

import logging
import re

import config
from . import rows

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"

# One or more blank lines, tolerating stray whitespace on them
BLANK_LINE_RUN = re.compile(r'\n\s*\n')


def split_blocks(content: str) -> list[str]:
    """
    Split content into blocks.

    Leading/trailing whitespace is ignored. Blank content has no blocks.
    """
    stripped = content.strip()
    if not stripped:
        return []
    return BLANK_LINE_RUN.split(stripped)


def count_blocks(content: str) -> int:
    """Number of blocks (rows) in the content."""
    return len(split_blocks(content))


def extract_string_labels(content: str, instrument: str) -> list[str]:
    """
    Detect the string labels from the first row of existing content.

    Reads the first N lines (N = string count for the instrument) and takes
    everything before the first filler character on each. A line without
    filler is used whole. Content whose first block is shorter than N lines
    yields labels from whatever lines follow, or fewer labels.
    """
    lines = content.split("\n")[:rows.string_count(instrument)]
    return [line.split(config.FILLER)[0] for line in lines]


def add_row(content: str, instrument: str, device_class: str = config.WIDE) -> str:
    """
    Append a blank row using the labels detected from the content.

    The separator is always prepended, even to empty content.
    """
    labels = extract_string_labels(content, instrument)
    return content + BLOCK_SEPARATOR + rows.generate_row(labels, device_class)


def delete_last_row(content: str) -> str:
    """
    Remove the last block.

    The sole remaining block is never deleted: with fewer than two blocks the
    content is returned unchanged. Otherwise the remaining blocks are rejoined
    with a single blank line.
    """
    blocks = BLANK_LINE_RUN.split(content.strip())
    if len(blocks) < 2:
        return content
    return BLOCK_SEPARATOR.join(blocks[:-1])


def reset_content(instrument: str, device_class: str = config.WIDE) -> str:
    """Single blank row with the instrument's canonical labels."""
    return rows.generate_row(rows.default_labels(instrument), device_class)


def apply_raw_edit(new_text: str) -> str:
    """Free-typed text replaces the content as-is."""
    return new_text


class TabBlockEditor:
    """Content of one instrument part plus the parameters row operations need."""

    def __init__(self, content: str, instrument: str = config.GUITAR,
                 device_class: str = config.WIDE):
        rows.default_labels(instrument)  # validate
        self.content = content
        self.instrument = instrument
        self.device_class = device_class

    @property
    def block_count(self) -> int:
        return count_blocks(self.content)

    def string_labels(self) -> list[str]:
        return extract_string_labels(self.content, self.instrument)

    def add_row(self) -> str:
        self.content = add_row(self.content, self.instrument, self.device_class)
        logger.debug(f"Added {self.instrument} row ({self.block_count} rows)")
        return self.content

    def delete_last_row(self) -> str:
        before = self.content
        self.content = delete_last_row(self.content)
        if self.content == before:
            logger.debug("Delete ignored: only one row left")
        else:
            logger.debug(f"Deleted last {self.instrument} row ({self.block_count} rows)")
        return self.content

    def reset(self) -> str:
        self.content = reset_content(self.instrument, self.device_class)
        logger.debug(f"Reset {self.instrument} content")
        return self.content

    def apply_raw_edit(self, new_text: str) -> str:
        self.content = apply_raw_edit(new_text)
        return self.content
