"""
Stack-based checklist navigation.

The navigator walks one sibling list at a time. Entering a section pushes a
new frame with its own cursor, ``back`` pops exactly one frame, and popping
the root frame ends navigation. Only ``checked`` flags are ever mutated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from .models import MenuNode

RenderCallback = Callable[[Sequence[MenuNode], int], None]


class NavEvent(Enum):
    """Abstract input events"""

    UP = "up"
    DOWN = "down"
    ACTIVATE = "activate"
    BACK = "back"


@dataclass
class NavFrame:
    """One navigation level: a sibling list and its cursor"""

    nodes: List[MenuNode]
    cursor: int = 0
    label: Optional[str] = None

    @property
    def current(self) -> Optional[MenuNode]:
        if 0 <= self.cursor < len(self.nodes):
            return self.nodes[self.cursor]
        return None


class Navigator:
    """Modal navigation state machine over a checklist tree."""

    def __init__(
        self, tree: List[MenuNode], on_render: Optional[RenderCallback] = None
    ):
        self._stack: List[NavFrame] = [NavFrame(tree)]
        self.on_render = on_render

    @property
    def finished(self) -> bool:
        """True once ``back`` has been issued at the root level."""
        return not self._stack

    @property
    def depth(self) -> int:
        """Number of open levels (1 at the root, 0 when finished)."""
        return len(self._stack)

    @property
    def frame(self) -> Optional[NavFrame]:
        return self._stack[-1] if self._stack else None

    @property
    def cursor(self) -> int:
        return self._stack[-1].cursor if self._stack else 0

    @property
    def path(self) -> List[str]:
        """Labels of the sections entered so far, outermost first."""
        return [frame.label for frame in self._stack[1:]]

    def move_up(self) -> None:
        frame = self.frame
        if frame is not None and frame.cursor > 0:
            frame.cursor -= 1

    def move_down(self) -> None:
        frame = self.frame
        if frame is not None and frame.cursor < len(frame.nodes) - 1:
            frame.cursor += 1

    def activate(self) -> None:
        """Toggle the focused checkbox or enter the focused section."""
        frame = self.frame
        node = frame.current if frame is not None else None
        if node is None:
            return
        if node.is_checkbox:
            node.toggle()
        elif node.children:
            self._stack.append(NavFrame(node.children, 0, node.label))

    def back(self) -> None:
        """Leave the current level; leaving the root finishes navigation."""
        if self._stack:
            self._stack.pop()

    def draw(self) -> None:
        """Notify the render callback about the current level."""
        frame = self.frame
        if frame is not None and self.on_render is not None:
            self.on_render(frame.nodes, frame.cursor)

    def handle(self, event: NavEvent) -> bool:
        """
        Apply one input event and redraw

        Args:
            event: navigation event

        Returns:
            True while navigation is still running
        """
        if self.finished:
            return False

        if event is NavEvent.UP:
            self.move_up()
        elif event is NavEvent.DOWN:
            self.move_down()
        elif event is NavEvent.ACTIVATE:
            self.activate()
        elif event is NavEvent.BACK:
            self.back()

        if self.finished:
            return False
        self.draw()
        return True

    def run(self, events: Iterable[NavEvent]) -> bool:
        """
        Draw, then consume events until navigation finishes

        Args:
            events: event source; blocks between events if it wants to

        Returns:
            True if navigation finished, False if the events ran out first
        """
        self.draw()
        for event in events:
            if not self.handle(event):
                break
        return self.finished
