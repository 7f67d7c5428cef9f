"""
Checklist tree model
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .actions import Action


class NodeKind(Enum):
    """Kind of a menu node"""

    CHECKBOX = "checkbox"
    SECTION = "section"


@dataclass
class MenuNode:
    """A single entry of the checklist tree.

    Checkbox nodes are leaves carrying an action; section nodes are
    containers whose ``checked`` flag is never consulted. After the tree is
    built only ``checked`` changes.
    """

    label: str
    kind: NodeKind = NodeKind.CHECKBOX
    checked: bool = True
    children: List["MenuNode"] = field(default_factory=list)
    action: Optional[Action] = None

    @classmethod
    def checkbox(cls, label: str, action: Action, checked: bool = True) -> "MenuNode":
        return cls(label=label, kind=NodeKind.CHECKBOX, checked=checked, action=action)

    @classmethod
    def section(
        cls, label: str, children: Optional[List["MenuNode"]] = None
    ) -> "MenuNode":
        return cls(label=label, kind=NodeKind.SECTION, children=children or [])

    @property
    def is_checkbox(self) -> bool:
        return self.kind is NodeKind.CHECKBOX

    @property
    def is_section(self) -> bool:
        return self.kind is NodeKind.SECTION

    def toggle(self) -> None:
        """Flip the selection state of a checkbox (sections are left alone)."""
        if self.is_checkbox:
            self.checked = not self.checked


def walk(nodes: List[MenuNode], depth: int = 0) -> Iterator[Tuple[int, MenuNode]]:
    """Yield ``(depth, node)`` pairs in pre-order, document order."""
    for node in nodes:
        yield depth, node
        if node.is_section:
            yield from walk(node.children, depth + 1)
