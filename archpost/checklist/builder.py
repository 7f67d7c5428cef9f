"""
Checklist tree builder.

Turns a parsed YAML document (plain dicts, lists and scalars as returned by
``load_checklist``) into a list of ``MenuNode`` trees plus the flat list of
``after.commands``.

The document format is forgiving: anything with an unexpected shape is
skipped or replaced by a default, never reported as an error. Skipped
entries are recorded in ``ChecklistBuilder.diagnostics``.

Example document::

    sections:
      Tools:
        sections:
          - Editors:
              items: [neovim, {name: vscode, enabled: false}]
        items:
          - git
          - name: rustup
            commands:
              - __MGR__ -S rustup
              - rustup default stable
    after:
      commands:
        - __NOTIFY__ "Done"
"""

import logging
from typing import Any, List, NamedTuple, Optional

from .actions import Action, AliasConfig, PackageAction, ShellAction
from .models import MenuNode

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "yes", "on", "y"}
_FALSE_STRINGS = {"false", "no", "off", "n"}


class Checklist(NamedTuple):
    """Result of building a document"""

    tree: List[MenuNode]
    after_commands: List[str]


def is_scalar(node: Any) -> bool:
    """True for YAML scalars (null is not a scalar)."""
    return node is not None and not isinstance(node, (dict, list))


def scalar_text(node: Any) -> str:
    """String form of a scalar, spelling booleans the way YAML does."""
    if isinstance(node, bool):
        return "true" if node else "false"
    return str(node)


def scalar_bool(node: Any) -> Optional[bool]:
    """Boolean value of a scalar, or None when it is not a boolean."""
    if isinstance(node, bool):
        return node
    if isinstance(node, str):
        lowered = node.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


def normalize_commands(node: Any) -> List[str]:
    """Scalar -> one-element list; sequence -> its scalar elements; else []."""
    if isinstance(node, list):
        return [scalar_text(cmd) for cmd in node if is_scalar(cmd)]
    if is_scalar(node):
        return [scalar_text(node)]
    return []


class ChecklistBuilder:
    """Builds checklist trees from parsed documents"""

    def __init__(self, aliases: Optional[AliasConfig] = None):
        self.aliases = aliases or AliasConfig()
        self.diagnostics: List[str] = []

    def build(self, document: Any) -> Checklist:
        """
        Build the menu tree and the after commands of a document

        Args:
            document: parsed YAML root

        Returns:
            Checklist(tree, after_commands)
        """
        self.diagnostics = []
        return Checklist(self.build_root(document), self.build_after(document))

    def build_root(self, document: Any) -> List[MenuNode]:
        """Build the top-level node list from ``sections``."""
        if not isinstance(document, dict):
            if document is not None:
                self._note("document root is not a mapping; checklist is empty")
            return []

        sections = document.get("sections")
        if isinstance(sections, dict):
            return self.build_section_group(sections)
        if isinstance(sections, list):
            result = []
            for group in sections:
                result.extend(self.build_section_group(group))
            return result
        if sections is not None:
            self._note("top-level 'sections' is neither a mapping nor a list")
        return []

    def build_after(self, document: Any) -> List[str]:
        """Extract ``after.commands``; malformed input yields []."""
        if not isinstance(document, dict):
            return []
        after = document.get("after")
        if not isinstance(after, dict):
            return []
        return normalize_commands(after.get("commands"))

    def build_section_group(self, group: Any) -> List[MenuNode]:
        """Build one section node per entry of a ``name -> body`` mapping."""
        if not isinstance(group, dict):
            self._note(f"section group {group!r} is not a mapping")
            return []

        nodes = []
        for name, body in group.items():
            if not is_scalar(name):
                self._note(f"section name {name!r} is not a scalar")
                continue
            nodes.append(self.build_section(scalar_text(name), body))
        return nodes

    def build_section(self, label: str, body: Any) -> MenuNode:
        """Build a section: nested section groups first, then its items."""
        section = MenuNode.section(label)
        if not isinstance(body, dict):
            return section

        subsections = body.get("sections")
        if isinstance(subsections, list):
            for group in subsections:
                section.children.extend(self.build_section_group(group))

        items = body.get("items")
        if isinstance(items, list):
            entries = items
        elif is_scalar(items):
            entries = [items]
        else:
            entries = []

        for entry in entries:
            node = self.build_item(entry)
            if node is not None:
                section.children.append(node)
        return section

    def build_item(self, entry: Any) -> Optional[MenuNode]:
        """
        Build a checkbox node from an item entry

        Args:
            entry: bare package name, or mapping with name/enabled/commands

        Returns:
            MenuNode, or None when the entry has no usable name
        """
        if is_scalar(entry):
            label = scalar_text(entry)
            return MenuNode.checkbox(label, PackageAction(label, self.aliases))

        if not isinstance(entry, dict):
            self._note(f"item {entry!r} is neither a name nor a mapping")
            return None

        name = entry.get("name")
        if not is_scalar(name):
            self._note(f"item {entry!r} has no scalar 'name'")
            return None
        label = scalar_text(name)

        checked = True
        enabled = entry.get("enabled")
        if is_scalar(enabled):
            value = scalar_bool(enabled)
            if value is None:
                self._note(f"item '{label}': 'enabled' is not a boolean, using true")
            else:
                checked = value

        return MenuNode.checkbox(label, self._item_action(label, entry), checked)

    def _item_action(self, label: str, entry: dict) -> Action:
        commands = normalize_commands(entry.get("commands"))
        if commands:
            return ShellAction(tuple(commands), self.aliases)
        return PackageAction(label, self.aliases)

    def _note(self, message: str) -> None:
        logger.debug("skipped: %s", message)
        self.diagnostics.append(message)


def build_checklist(document: Any, aliases: Optional[AliasConfig] = None) -> Checklist:
    """Build a document with a throwaway builder."""
    return ChecklistBuilder(aliases).build(document)
