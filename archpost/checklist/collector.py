"""
Flattens a checklist tree into the final ordered command list
"""

from typing import Iterable, List

from .models import MenuNode


def collect_actions(nodes: Iterable[MenuNode], out: List[str]) -> List[str]:
    """Append rendered actions of checked leaves to ``out`` (pre-order)."""
    for node in nodes:
        if node.is_section:
            collect_actions(node.children, out)
        elif node.checked and node.action is not None:
            out.append(node.action.render())
    return out


def collect(nodes: Iterable[MenuNode], after_commands: Iterable[str] = ()) -> List[str]:
    """
    Build the script body

    Args:
        nodes: checklist tree (possibly edited)
        after_commands: commands appended verbatim after the tree's commands

    Returns:
        Ordered list of command strings
    """
    commands = collect_actions(nodes, [])
    commands.extend(after_commands)
    return commands
