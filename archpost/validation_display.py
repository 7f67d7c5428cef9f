"""
Helpers for displaying settings validation and checklist diagnostics.

Keeps the symbol conventions (✗ error, ! warning, i info) in one place.
"""

from typing import List, Tuple

import click
from colorama import Fore, Style

from .checklist.models import MenuNode, walk
from .config import ConfigManager


class ValidationDisplay:
    """Uniform display of validation results"""

    ERROR_PREFIX = "✗"
    WARNING_PREFIX = "!"
    INFO_PREFIX = "i"

    @classmethod
    def categorize_results(cls, results: List[str]) -> Tuple[List[str], List[str]]:
        """Split results into warnings/info and errors"""
        warnings_and_info = [
            r for r in results if r.startswith((cls.WARNING_PREFIX, cls.INFO_PREFIX))
        ]
        errors = [r for r in results if r.startswith(cls.ERROR_PREFIX)]
        return warnings_and_info, errors

    @classmethod
    def display_validation_results(
        cls,
        config_manager: ConfigManager,
        show_warnings: bool = False,
    ) -> bool:
        """
        Show settings validation results

        Args:
            config_manager: settings manager
            show_warnings: also print warnings and info lines

        Returns:
            bool: True when there are no errors
        """
        warnings_and_info, errors = cls.categorize_results(
            config_manager.validate_config()
        )

        if show_warnings and warnings_and_info:
            click.echo(f"{Fore.YELLOW}Settings warnings:{Style.RESET_ALL}", err=True)
            for msg in warnings_and_info:
                click.echo(
                    f"  {Fore.YELLOW}{msg[0]}{Style.RESET_ALL} {msg[1:]}", err=True
                )

        if errors:
            click.echo(f"{Fore.RED}Settings errors:{Style.RESET_ALL}", err=True)
            for error in errors:
                click.echo(f"  {Fore.RED}✗{Style.RESET_ALL} {error[1:]}", err=True)
            return False

        return True

    @classmethod
    def display_diagnostics(cls, diagnostics: List[str], err: bool = True) -> None:
        """Show entries the checklist builder skipped"""
        if not diagnostics:
            return
        click.echo(f"{Fore.YELLOW}Skipped entries:{Style.RESET_ALL}", err=err)
        for message in diagnostics:
            click.echo(f"  {Fore.YELLOW}!{Style.RESET_ALL} {message}", err=err)

    @classmethod
    def display_outline(cls, tree: List[MenuNode], after_commands: List[str]) -> None:
        """Print the checklist as an indented outline (check command)"""
        checkboxes = 0
        selected = 0
        for depth, node in walk(tree):
            indent = "  " * depth
            if node.is_section:
                click.echo(f"{indent}{Fore.CYAN}-> {node.label}{Style.RESET_ALL}")
                continue
            checkboxes += 1
            if node.checked:
                selected += 1
                mark = f"{Fore.GREEN}[x]{Style.RESET_ALL}"
            else:
                mark = "[ ]"
            click.echo(f"{indent}{mark} {node.label}")

        if after_commands:
            click.echo(f"\n{Fore.CYAN}After:{Style.RESET_ALL}")
            for command in after_commands:
                click.echo(f"  {command}")

        click.echo(
            f"\n{Fore.GREEN}✓ {selected}/{checkboxes} items selected, "
            f"{len(after_commands)} after command(s){Style.RESET_ALL}"
        )
