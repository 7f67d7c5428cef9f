"""
TUI constants for archpost.

Centralizes the glyphs and hint text used by the checklist widgets.
"""

CHECKED_MARK = "[x]"
"""Prefix of a selected checkbox row."""

UNCHECKED_MARK = "[ ]"
"""Prefix of a deselected checkbox row."""

SECTION_MARK = "->"
"""Prefix of a section row."""

PATH_SEPARATOR = " › "
"""Separator between section labels in the breadcrumb."""

KEY_HINT = "↑/↓ move  →/Enter select  ←/ESC back  q quit"
"""Key hint shown below the list."""

HELP_KEYS = (
    ("↑/↓  k/j", "Move up/down"),
    ("Enter  →  Space", "Toggle item / open section"),
    ("Esc  ←  Bksp  q", "Back (at top level: finish)"),
    ("Ctrl+C", "Abort without output"),
    ("?", "Show this help"),
)
"""(keys, description) rows of the help dialog."""
