"""
Checklist core: tree model, builder, navigator and collector.
"""

from .actions import Action, AliasConfig, PackageAction, ShellAction
from .builder import Checklist, ChecklistBuilder, build_checklist
from .collector import collect
from .loader import ChecklistLoadError, load_checklist
from .models import MenuNode, NodeKind, walk
from .navigator import NavEvent, NavFrame, Navigator

__all__ = [
    "Action",
    "AliasConfig",
    "PackageAction",
    "ShellAction",
    "Checklist",
    "ChecklistBuilder",
    "build_checklist",
    "collect",
    "ChecklistLoadError",
    "load_checklist",
    "MenuNode",
    "NodeKind",
    "walk",
    "NavEvent",
    "NavFrame",
    "Navigator",
]
