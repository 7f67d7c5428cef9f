"""
Checklist widget for the Textual TUI
"""

from typing import List, Sequence

from rich.text import Text
from textual.widgets import Static

from ...checklist.models import MenuNode
from ..constants import (
    CHECKED_MARK,
    KEY_HINT,
    PATH_SEPARATOR,
    SECTION_MARK,
    UNCHECKED_MARK,
)


def format_row(node: MenuNode) -> str:
    """Row text of a node, without highlighting."""
    if node.is_section:
        return f"{SECTION_MARK} {node.label}"
    mark = CHECKED_MARK if node.checked else UNCHECKED_MARK
    return f"{mark} {node.label}"


class ChecklistView(Static):
    """Displays one navigation level: breadcrumb, rows and key hints.

    The widget holds no navigation state of its own; ``show`` is called by
    the navigator's render callback with the current sibling list.
    """

    DEFAULT_CSS = """
    ChecklistView {
        width: 100%;
        height: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self.rows: List[str] = []
        self.cursor: int = 0

    def show(self, nodes: Sequence[MenuNode], cursor: int, path: Sequence[str] = ()) -> None:
        """
        Redraw for the given level

        Args:
            nodes: current sibling list
            cursor: index of the highlighted row
            path: labels of the entered sections, outermost first
        """
        self.rows = [format_row(node) for node in nodes]
        self.cursor = cursor

        text = Text()
        if path:
            text.append(PATH_SEPARATOR.join(path), style="bold cyan")
            text.append("\n\n")

        if not self.rows:
            text.append("(empty)", style="dim")
            text.append("\n")

        for index, (node, row) in enumerate(zip(nodes, self.rows)):
            if index == cursor:
                style = "reverse"
            elif node.is_section:
                style = "bold"
            elif not node.checked:
                style = "dim"
            else:
                style = ""
            text.append(row, style=style)
            text.append("\n")

        text.append("\n")
        text.append(KEY_HINT, style="dim")
        self.update(text)
