"""
Actions attached to checklist items.

An action turns a selected item into exactly one shell command string.
Rendering is pure: no I/O and no dependence on anything but the action's
own fields and its alias settings.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_MANAGER = "yay --noconfirm --answerdiff=None --answeredit=None"
DEFAULT_MANAGER_ALIAS = "__MGR__"
DEFAULT_NOTIFY = "notify-send -i dialog-information -t 5000 -u critical"
DEFAULT_NOTIFY_ALIAS = "__NOTIFY__"

COMMAND_SEPARATOR = " && "


@dataclass(frozen=True)
class AliasConfig:
    """Command prefixes and the placeholder tokens that stand for them.

    Attributes:
        manager: package manager invocation prefix, including its flags.
        manager_alias: token replaced by ``manager`` in shell commands.
        notify: notification command prefix, including its flags.
        notify_alias: token replaced by ``notify`` in shell commands.
    """

    manager: str = DEFAULT_MANAGER
    manager_alias: str = DEFAULT_MANAGER_ALIAS
    notify: str = DEFAULT_NOTIFY
    notify_alias: str = DEFAULT_NOTIFY_ALIAS

    def substitute(self, script: str) -> str:
        """Replace every occurrence of both alias tokens in ``script``.

        Exact literal matching, no wildcards. Both tokens are replaced in a
        single pass, so text inserted for one token is never rescanned.
        """
        replacements = {self.notify_alias: self.notify, self.manager_alias: self.manager}
        # longest token first when one token contains the other
        tokens = sorted(filter(None, replacements), key=len, reverse=True)
        if not tokens:
            return script
        pattern = "|".join(re.escape(token) for token in tokens)
        return re.sub(pattern, lambda match: replacements[match.group(0)], script)

    def install_command(self, package: str) -> str:
        """Package manager invocation installing a single package."""
        return f"{self.manager} -S {package}"


class Action(ABC):
    """What happens when a checklist item is selected."""

    @abstractmethod
    def render(self) -> str:
        """Render the action as one shell command string."""


@dataclass(frozen=True)
class PackageAction(Action):
    """Install ``name`` with the configured package manager."""

    name: str
    aliases: AliasConfig = field(default_factory=AliasConfig, repr=False)

    def render(self) -> str:
        return self.aliases.install_command(self.name)


@dataclass(frozen=True)
class ShellAction(Action):
    """Run a sequence of shell commands chained with ``&&``.

    The joined script is rendered as a single opaque command; alias tokens
    are expanded after joining.
    """

    commands: Tuple[str, ...]
    aliases: AliasConfig = field(default_factory=AliasConfig, repr=False)

    def __post_init__(self):
        # lists are accepted for convenience, stored as a tuple
        if not isinstance(self.commands, tuple):
            object.__setattr__(self, "commands", tuple(self.commands))

    def render(self) -> str:
        return self.aliases.substitute(COMMAND_SEPARATOR.join(self.commands))
