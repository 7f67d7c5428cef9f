#!/usr/bin/env python3
"""
archpost - Main CLI
"""

import logging
import sys

import click
import yaml
from colorama import Fore, Style

from .__version__ import get_version_info
from .checklist import (
    ChecklistBuilder,
    ChecklistLoadError,
    Navigator,
    collect,
    load_checklist,
)
from .config import ConfigManager
from .managers.script_manager import ScriptManager
from .utils import set_app_dir
from .validation_display import ValidationDisplay

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Debug logging with --verbose, warnings only otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def load_settings(ctx) -> ConfigManager:
    """Load settings.yml and abort on settings errors."""
    config_manager = ConfigManager()
    try:
        config_manager.load_config()
    except (OSError, yaml.YAMLError) as e:
        click.echo(f"{Fore.RED}Error: Failed to load settings: {e}{Style.RESET_ALL}")
        sys.exit(1)

    if not ValidationDisplay.display_validation_results(
        config_manager, show_warnings=ctx.obj.get("verbose", False)
    ):
        sys.exit(1)
    return config_manager


def load_and_build(source: str, config_manager: ConfigManager):
    """Load a checklist source and build its tree; exits on load errors."""
    try:
        document = load_checklist(source, timeout=config_manager.config.fetch.timeout)
    except ChecklistLoadError as e:
        click.echo(f"{Fore.RED}{e}{Style.RESET_ALL}", err=True)
        sys.exit(1)

    builder = ChecklistBuilder(config_manager.aliases)
    checklist = builder.build(document)
    return checklist, builder.diagnostics


def edit_checklist(tree, source: str) -> bool:
    """Run the TUI on the tree; returns False when the user aborted."""
    try:
        from .tui_textual.app import run_checklist_tui
    except ImportError as e:
        click.echo(f"{Fore.RED}Error: Textual TUI not available: {e}{Style.RESET_ALL}")
        click.echo("Use --yes to accept the checklist defaults without the TUI")
        sys.exit(1)

    return run_checklist_tui(Navigator(tree), source=source)


@click.group(invoke_without_command=True)
@click.option("--file", "-f", "source", help="Checklist YAML file or http(s)/file URL")
@click.option("--exec", "-e", "execute", is_flag=True, help="Execute generated script")
@click.option(
    "--write",
    "-w",
    "write",
    is_flag=False,
    flag_value="",
    default=None,
    metavar="[NAME]",
    help="Write script (optionally takes filename)",
)
@click.option("--yes", "-y", is_flag=True, help="Skip the TUI and accept the defaults")
@click.option(
    "--dry-run", "-n", is_flag=True, help="With --exec, show what would be run"
)
@click.option(
    "--config",
    "-c",
    "app_dir",
    default=None,
    help="archpost directory containing settings.yml",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--version", is_flag=True, help="Show version information")
@click.pass_context
def cli(ctx, source, execute, write, yes, dry_run, app_dir, verbose, version):
    """Arch-based GNU/Linux post install tool.

    Select items from a checklist, then print, write or execute the
    resulting commands.

    \b
    Examples:
      archpost -f packages.yml              - print the script
      archpost -f packages.yml -w           - write generated-script_<time>.sh
      archpost -f packages.yml -w setup.sh -e
      archpost check -f https://example.org/packages.yml
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)

    if app_dir:
        set_app_dir(app_dir)

    if version:
        version_info = get_version_info()
        click.echo(
            f"{Fore.CYAN}archpost {Fore.GREEN}{version_info['version']}{Style.RESET_ALL}"
        )
        if version_info["source"] == "metadata":
            click.echo(f"Version source: {Fore.GREEN}Package metadata{Style.RESET_ALL}")
            click.echo(f"Installed version: {version_info['installed_version']}")
        else:
            click.echo(f"Version source: {Fore.YELLOW}Static fallback{Style.RESET_ALL}")
        click.echo(f"Static version: {version_info['static_version']}")
        return

    if ctx.invoked_subcommand is not None:
        return

    if not source:
        click.echo("Must provide YAML via -f <file|url>", err=True)
        sys.exit(1)

    config_manager = load_settings(ctx)
    checklist, diagnostics = load_and_build(source, config_manager)
    if verbose:
        ValidationDisplay.display_diagnostics(diagnostics)

    if not yes and not edit_checklist(checklist.tree, source):
        return

    commands = collect(checklist.tree, checklist.after_commands)
    logger.debug("collected %d command(s)", len(commands))
    script_manager = ScriptManager(config_manager.config.script)

    if write is not None:
        try:
            script_path = script_manager.write_script(commands, write or None)
        except OSError as e:
            click.echo(f"{Fore.RED}Error: Failed to write script: {e}{Style.RESET_ALL}")
            sys.exit(1)
        click.echo(f"# Script saved to ./{script_path}")

        if execute:
            click.echo("Executing script...")
            result = script_manager.execute_script(script_path, dry_run=dry_run)
            if result["dry_run"]:
                click.echo(f"Would run: {result['command']}")
            else:
                click.echo(f"Execution finished with code {result['returncode']}")
    elif execute:
        click.echo("Executing directly...")
        result = script_manager.execute_commands(commands, dry_run=dry_run)
        if result["dry_run"]:
            for entry in result["results"]:
                click.echo(f"Would run: {entry['command']}")
        elif not result["success"]:
            click.echo(
                f"{Fore.RED}Command failed: {result['failed_command']}{Style.RESET_ALL}",
                err=True,
            )
            sys.exit(1)
    else:
        click.echo(script_manager.render_script(commands), nl=False)


@cli.command()
@click.option(
    "--file", "-f", "source", required=True, help="Checklist YAML file or URL"
)
@click.pass_context
def check(ctx, source):
    """Validate a checklist and print its outline."""
    config_manager = load_settings(ctx)
    checklist, diagnostics = load_and_build(source, config_manager)

    ValidationDisplay.display_outline(checklist.tree, checklist.after_commands)
    if diagnostics:
        click.echo()
        ValidationDisplay.display_diagnostics(diagnostics, err=False)


@cli.command(name="init-settings")
@click.option("--force", is_flag=True, help="Overwrite an existing settings.yml")
def init_settings(force):
    """Write settings.yml with the default values."""
    config_manager = ConfigManager()
    if config_manager.config_path.exists() and not force:
        click.echo(
            f"{Fore.YELLOW}Settings already exist: {config_manager.config_path}{Style.RESET_ALL}"
        )
        click.echo("Use --force to overwrite")
        sys.exit(1)

    config_manager.load_config()
    path = config_manager.save_config()
    click.echo(f"{Fore.GREEN}✓ Settings written to {path}{Style.RESET_ALL}")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
