#!/usr/bin/env python3
"""
archpost - Script Manager

Writes the collected commands to a script file and executes them.
"""

import subprocess
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..config import ScriptConfig
from ..utils import build_script_name


class ScriptManager:
    """Output and execution of generated scripts"""

    def __init__(self, script_config: Optional[ScriptConfig] = None):
        """
        Initialize the ScriptManager.

        Args:
            script_config: ScriptConfig dataclass instance
        """
        self.script_config = script_config or ScriptConfig()

    def render_script(self, commands: List[str]) -> str:
        """Script text: optional header line, then one command per line."""
        lines = []
        if self.script_config.header:
            lines.append(self.script_config.header)
        lines.extend(commands)
        return "".join(f"{line}\n" for line in lines)

    def write_script(
        self, commands: List[str], path: Optional[str] = None
    ) -> Path:
        """
        Write the script file

        Args:
            commands: ordered command list
            path: output file; a timestamped name is generated when omitted

        Returns:
            Path of the written file
        """
        if not path:
            path = build_script_name(self.script_config.name_format)
        script_path = Path(path)
        script_path.write_text(self.render_script(commands), encoding="utf-8")
        return script_path

    def execute_script(self, path: Path, dry_run: bool = False) -> Dict[str, Any]:
        """
        Run a written script with the configured shell

        Returns:
            {
                "command": str,
                "success": bool,
                "returncode": int,
                "duration_ms": float,
                "error": str | None,
                "dry_run": bool,
            }
        """
        command = f"{self.script_config.shell} {path}"
        if dry_run:
            return {
                "command": command,
                "success": True,
                "returncode": 0,
                "duration_ms": 0,
                "error": None,
                "dry_run": True,
            }

        result = self._run_single_command(command)
        result["dry_run"] = False
        return result

    def execute_commands(
        self,
        commands: List[str],
        dry_run: bool = False,
        on_command_start: Optional[callable] = None,
        on_command_complete: Optional[callable] = None,
    ) -> Dict[str, Any]:
        """
        Run commands one by one, stopping at the first failure.

        Args:
            commands: ordered command list
            dry_run: report what would run without running it
            on_command_start: callback (index, command) -> None
            on_command_complete: callback (index, command, success) -> None

        Returns:
            {
                "success": bool,         # every command succeeded
                "total": int,            # number of commands
                "succeeded": int,        # commands that succeeded
                "failed_command": str | None,
                "results": List[Dict],   # per-command results
                "summary": str,
                "dry_run": bool,
            }
        """
        if not commands:
            return {
                "success": True,
                "total": 0,
                "succeeded": 0,
                "failed_command": None,
                "results": [],
                "summary": "No commands to run",
                "dry_run": dry_run,
            }

        if dry_run:
            return {
                "success": True,
                "total": len(commands),
                "succeeded": 0,
                "failed_command": None,
                "results": [
                    {"index": i, "command": command, "would_execute": True}
                    for i, command in enumerate(commands)
                ],
                "summary": f"Would execute {len(commands)} command(s)",
                "dry_run": True,
            }

        results = []
        succeeded = 0
        failed_command = None

        for i, command in enumerate(commands):
            if on_command_start:
                on_command_start(i, command)

            result = self._run_single_command(command)
            result["index"] = i
            results.append(result)

            if on_command_complete:
                on_command_complete(i, command, result["success"])

            if not result["success"]:
                failed_command = command
                break
            succeeded += 1

        total = len(commands)
        if failed_command is None:
            summary = f"Commands: {succeeded}/{total}"
        else:
            shown = failed_command
            if len(shown) > 30:
                shown = shown[:27] + "..."
            summary = f"Commands: {succeeded}/{total} ({shown} failed)"

        return {
            "success": failed_command is None,
            "total": total,
            "succeeded": succeeded,
            "failed_command": failed_command,
            "results": results,
            "summary": summary,
            "dry_run": False,
        }

    def _run_single_command(self, command: str) -> Dict[str, Any]:
        """Run one command through the shell, attached to the terminal."""
        start = time.time()

        try:
            result = subprocess.run(command, shell=True)
        except OSError as e:
            return {
                "command": command,
                "success": False,
                "returncode": -1,
                "duration_ms": (time.time() - start) * 1000,
                "error": str(e),
            }

        return {
            "command": command,
            "success": result.returncode == 0,
            "returncode": result.returncode,
            "duration_ms": (time.time() - start) * 1000,
            "error": None if result.returncode == 0 else f"Exit code {result.returncode}",
        }
