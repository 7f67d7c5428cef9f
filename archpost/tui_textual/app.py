"""
Main Textual application for the archpost checklist
"""

from typing import Optional, Sequence

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widgets import Footer, Header

from ..__version__ import get_version
from ..checklist.models import MenuNode
from ..checklist.navigator import NavEvent, Navigator
from .widgets.checklist_view import ChecklistView
from .widgets.help_dialog import HelpDialog


class ChecklistApp(App[bool]):
    """Checklist editor.

    A thin driver around ``Navigator``: key bindings are translated into
    navigation events, and the navigator's render callback redraws the
    ``ChecklistView``. The app returns True when the user leaves the root
    level and False when it is aborted with ctrl+c.
    """

    BINDINGS = [
        Binding("up,k", "nav('up')", "Up", show=False),
        Binding("down,j", "nav('down')", "Down", show=False),
        Binding("enter,right,space", "nav('activate')", "Select"),
        Binding("escape,left,backspace,q,Q", "nav('back')", "Back"),
        Binding("question_mark", "show_help", "Help"),
        Binding("ctrl+c", "abort", "Abort", priority=True),
    ]

    def __init__(self, navigator: Navigator, source: Optional[str] = None):
        super().__init__()
        self.navigator = navigator
        self.source = source

    def compose(self) -> ComposeResult:
        yield Header()
        yield ChecklistView(id="checklist")
        yield Footer()

    def on_mount(self) -> None:
        self.title = f"archpost {get_version()}"
        self.sub_title = self.source or "Post-install checklist"
        self.navigator.on_render = self._render_level
        self.navigator.draw()

    def _render_level(self, nodes: Sequence[MenuNode], cursor: int) -> None:
        self.query_one(ChecklistView).show(nodes, cursor, self.navigator.path)

    def action_nav(self, event_name: str) -> None:
        """Forward a key press to the navigator"""
        if isinstance(self.screen, ModalScreen):
            return
        if not self.navigator.handle(NavEvent(event_name)):
            self.exit(True)

    def action_abort(self) -> None:
        self.exit(False)

    def action_show_help(self) -> None:
        """Show key bindings"""
        if not isinstance(self.screen, ModalScreen):
            self.push_screen(HelpDialog())


def run_checklist_tui(navigator: Navigator, source: Optional[str] = None) -> bool:
    """
    Run the checklist editor until the user finishes or aborts

    Returns:
        True when finished normally, False when aborted
    """
    app = ChecklistApp(navigator, source=source)
    return bool(app.run())
