"""
Key binding help for the checklist editor
"""

from typing import Sequence, Tuple

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label

from ..constants import HELP_KEYS


def help_text(keys: Sequence[Tuple[str, str]] = HELP_KEYS) -> Text:
    """Key table as styled text, one binding per line."""
    text = Text()
    text.append("Keyboard Shortcuts\n\n", style="bold")
    for key, description in keys:
        text.append(f"  {key:<18}", style="bold green")
        text.append(f"{description}\n")
    text.append("\nAny key closes this help", style="dim")
    return text


class HelpDialog(ModalScreen):
    """Modal key table; any key dismisses it"""

    DEFAULT_CSS = """
    HelpDialog {
        align: center middle;
    }

    HelpDialog > Vertical {
        width: 60;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(help_text())

    def on_key(self, event) -> None:
        # ctrl+c stays with the app's abort binding
        if event.key == "ctrl+c":
            return
        event.stop()
        self.dismiss()
