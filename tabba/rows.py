"""
Blank tab row generation.

A row is one line per string: the string label followed by a run of filler
characters, e.g. "e|--------".
"""

import config


def row_width(device_class: str) -> int:
    """Filler length for a device class (narrow screens get shorter rows)."""
    if device_class == config.NARROW:
        return config.NARROW_WIDTH
    return config.WIDE_WIDTH


def generate_row(labels: list[str], device_class: str = config.WIDE) -> str:
    """
    Generate one blank row for the given string labels.

    Each line is the label followed by the filler run; lines are joined by
    single newlines with no trailing separator.
    """
    filler = config.FILLER * row_width(device_class)
    return "\n".join(f"{label}{filler}" for label in labels)


def default_labels(instrument: str) -> list[str]:
    """Get the canonical string labels for an instrument."""
    try:
        return list(config.DEFAULT_STRINGS[instrument])
    except KeyError:
        raise ValueError(f"Unknown instrument: {instrument}") from None


def string_count(instrument: str) -> int:
    """Number of strings (lines per row) for an instrument."""
    return len(default_labels(instrument))
