"""Tests for the archpost command line (TUI bypassed with --yes)."""

import io
import urllib.error
import urllib.request

import pytest
import yaml
from click.testing import CliRunner

from archpost.checklist.actions import DEFAULT_MANAGER
from archpost.cli import cli

DOCUMENT = {
    "sections": {
        "Tools": {
            "items": [{"name": "git"}, {"name": "x", "enabled": False}],
        }
    },
    "after": {"commands": ["echo done"]},
}


@pytest.fixture
def app_dir(tmp_path, monkeypatch):
    directory = tmp_path / "app"
    directory.mkdir()
    monkeypatch.setenv("ARCHPOST_DIR", str(directory))
    return directory


@pytest.fixture
def checklist_file(tmp_path):
    path = tmp_path / "packages.yml"
    path.write_text(yaml.dump(DOCUMENT, sort_keys=False))
    return path


class TestPrint:
    """Default mode prints the script."""

    def test_prints_header_and_commands(self, app_dir, checklist_file):
        result = CliRunner().invoke(cli, ["-f", str(checklist_file), "--yes"])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "# Generated script",
            f"{DEFAULT_MANAGER} -S git",
            "echo done",
        ]

    def test_settings_change_manager(self, app_dir, checklist_file):
        (app_dir / "settings.yml").write_text(
            "settings:\n  aliases:\n    manager: paru\n"
        )
        result = CliRunner().invoke(cli, ["-f", str(checklist_file), "-y"])

        assert result.exit_code == 0, result.output
        assert "paru -S git" in result.output

    def test_numeric_package_name_kept_verbatim(self, app_dir, tmp_path):
        path = tmp_path / "numeric.yml"
        path.write_text("sections:\n  V:\n    items:\n      - 1.10\n")
        result = CliRunner().invoke(cli, ["-f", str(path), "-y"])

        assert result.exit_code == 0, result.output
        assert f"{DEFAULT_MANAGER} -S 1.10" in result.output.splitlines()

    def test_missing_source(self, app_dir):
        result = CliRunner().invoke(cli, ["--yes"])
        assert result.exit_code == 1
        assert "Must provide YAML" in result.output

    def test_unreadable_source(self, app_dir, tmp_path):
        result = CliRunner().invoke(cli, ["-f", str(tmp_path / "absent.yml"), "-y"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_settings_abort(self, app_dir, checklist_file):
        (app_dir / "settings.yml").write_text(
            "settings:\n  aliases:\n    manager: ''\n"
        )
        result = CliRunner().invoke(cli, ["-f", str(checklist_file), "-y"])
        assert result.exit_code == 1


class TestWrite:
    """--write with and without a file name."""

    def test_write_named_file(self, app_dir, checklist_file, tmp_path):
        target = tmp_path / "setup.sh"
        result = CliRunner().invoke(
            cli, ["-f", str(checklist_file), "-y", "-w", str(target)]
        )

        assert result.exit_code == 0, result.output
        assert f"# Script saved to ./{target}" in result.output
        assert target.read_text() == (
            f"# Generated script\n{DEFAULT_MANAGER} -S git\necho done\n"
        )

    def test_write_generated_name(self, app_dir, checklist_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(cli, ["-f", str(checklist_file), "-y", "-w"])

        assert result.exit_code == 0, result.output
        written = list(tmp_path.glob("generated-script_*.sh"))
        assert len(written) == 1
        assert f"# Script saved to ./{written[0].name}" in result.output

    def test_write_and_exec_dry_run(self, app_dir, checklist_file, tmp_path):
        target = tmp_path / "setup.sh"
        result = CliRunner().invoke(
            cli, ["-f", str(checklist_file), "-y", "-w", str(target), "-e", "-n"]
        )

        assert result.exit_code == 0, result.output
        assert f"Would run: bash {target}" in result.output


class TestExec:
    """--exec without --write runs commands directly."""

    def test_exec_runs_commands(self, app_dir, tmp_path):
        marker = tmp_path / "marker.txt"
        path = tmp_path / "cmds.yml"
        path.write_text(
            yaml.dump(
                {
                    "sections": {
                        "Run": {"items": [{"name": "m", "commands": [f"echo hi > {marker}"]}]}
                    }
                }
            )
        )
        result = CliRunner().invoke(cli, ["-f", str(path), "-y", "-e"])

        assert result.exit_code == 0, result.output
        assert "Executing directly..." in result.output
        assert marker.read_text() == "hi\n"

    def test_exec_reports_failure(self, app_dir, tmp_path):
        path = tmp_path / "cmds.yml"
        path.write_text(yaml.dump({"after": {"commands": ["exit 4", "echo later"]}}))
        result = CliRunner().invoke(cli, ["-f", str(path), "-y", "-e"])

        assert result.exit_code == 1
        assert "Command failed: exit 4" in result.output

    def test_exec_dry_run(self, app_dir, checklist_file):
        result = CliRunner().invoke(cli, ["-f", str(checklist_file), "-y", "-e", "-n"])

        assert result.exit_code == 0, result.output
        assert f"Would run: {DEFAULT_MANAGER} -S git" in result.output
        assert "Would run: echo done" in result.output


class TestCheck:
    """check subcommand."""

    def test_outline_and_diagnostics(self, app_dir, tmp_path):
        path = tmp_path / "packages.yml"
        path.write_text(
            yaml.dump(
                {
                    "sections": {
                        "Tools": {"items": ["git", {"name": "x", "enabled": False}, {"commands": ["a"]}]}
                    }
                },
                sort_keys=False,
            )
        )
        result = CliRunner().invoke(cli, ["check", "-f", str(path)])

        assert result.exit_code == 0, result.output
        assert "-> Tools" in result.output
        assert "[ ] x" in result.output
        assert "1/2 items selected" in result.output
        assert "no scalar 'name'" in result.output


class TestMisc:
    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "archpost" in result.output

    def test_version_reports_source(self, monkeypatch):
        monkeypatch.setattr(
            "archpost.cli.get_version_info",
            lambda: {
                "version": "0.3.0",
                "installed_version": None,
                "static_version": "0.3.0",
                "source": "static",
            },
        )
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "Version source: Static fallback" in result.output
        assert "Static version: 0.3.0" in result.output
        assert "Installed version" not in result.output

    def test_init_settings(self, app_dir):
        runner = CliRunner()
        result = runner.invoke(cli, ["init-settings"])
        assert result.exit_code == 0, result.output
        assert (app_dir / "settings.yml").exists()

        again = runner.invoke(cli, ["init-settings"])
        assert again.exit_code == 1


class TestRemoteSource:
    """Checklists fetched from a URL."""

    def test_env_timeout_reaches_urlopen_as_number(self, app_dir, monkeypatch):
        monkeypatch.delenv("ARCHPOST_TEST_TIMEOUT", raising=False)
        (app_dir / "settings.yml").write_text(
            "settings:\n  fetch:\n    timeout: ${ARCHPOST_TEST_TIMEOUT:-5}\n"
        )
        seen = {}

        def fake_urlopen(request, timeout):
            seen["timeout"] = timeout
            return io.BytesIO(b"sections:\n  Tools:\n    items: [git]\n")

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
        result = CliRunner().invoke(
            cli, ["-f", "http://127.0.0.1:9/packages.yml", "-y"]
        )

        assert result.exit_code == 0, result.output
        assert seen["timeout"] == 5.0
        assert isinstance(seen["timeout"], float)
        assert f"{DEFAULT_MANAGER} -S git" in result.output

    def test_unreachable_url_is_reported(self, app_dir, monkeypatch):
        def refuse(request, timeout):
            raise urllib.error.URLError("connection refused")

        monkeypatch.setattr(urllib.request, "urlopen", refuse)
        result = CliRunner().invoke(
            cli, ["-f", "http://127.0.0.1:9/packages.yml", "-y"]
        )

        assert result.exit_code == 1
        assert "Failed to download" in result.output
