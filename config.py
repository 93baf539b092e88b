"""
Configuration settings for Tabba, the tab row editor.
Adjust these values to change row widths, defaults, or storage paths.
"""

# =============================================================================
# INSTRUMENTS
# =============================================================================

GUITAR = "guitar"
BASS = "bass"

# Fixed export/display order
INSTRUMENTS = [GUITAR, BASS]

# Canonical string labels, highest string first
DEFAULT_STRINGS = {
    GUITAR: ["e|", "B|", "G|", "D|", "A|", "E|"],
    BASS: ["G|", "D|", "A|", "E|"],
}

DEFAULT_TITLES = {
    GUITAR: "Guitar",
    BASS: "Bass",
}

# =============================================================================
# ROW LAYOUT
# =============================================================================

# Device classes
NARROW = "narrow"  # phones and other mobile-class clients
WIDE = "wide"

# Environment variable holding the client user agent (picks the default device class)
USER_AGENT_ENV = "TABBA_USER_AGENT"

# Filler run length after each string label
NARROW_WIDTH = 36
WIDE_WIDTH = 50

FILLER = "-"

# =============================================================================
# TAB DEFAULTS
# =============================================================================

DEFAULT_TAB_NAME = "My Tab"

# =============================================================================
# PERSISTENCE
# =============================================================================

# Keys in the key-value store (same names the browser build used)
TAB_DATA_KEY = "tabData"
TAB_NAME_KEY = "tabName"
SAVED_TABS_KEY = "savedTabs"

# JSON file backing the key-value store
STATE_FILE = "tabba_state.json"

# Where downloaded .txt exports are written
DOWNLOAD_DIR = "."

# =============================================================================
# LOGGING
# =============================================================================

LOG_DIR = "logs"
LOG_LEVEL = "INFO"
