"""
Tabba - ASCII tab row editor library

Modules:
    rows     - Blank row generation from string labels
    editor   - Block parsing, label detection, and row operations
    model    - Part / tab / saved-state helpers
    library  - Named tab library (save, load, delete)
    storage  - Key-value store and persistence of editor state
    export   - Download text and clipboard helpers
    keymap   - Key-to-command mapping and device detection
    session  - Event dispatch for a single editing session
"""
