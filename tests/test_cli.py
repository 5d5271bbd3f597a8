"""CLI smoke tests."""

from typer.testing import CliRunner

from git_sanity import __version__
from git_sanity.cli import app

runner = CliRunner()


def test_root_help_works() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Check files against" in result.stdout
    assert "--config" in result.stdout
    assert "--list-rules" in result.stdout


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_list_rules_shows_catalog_without_config() -> None:
    result = runner.invoke(app, ["--list-rules"])
    assert result.exit_code == 0
    assert "Available rules:" in result.stdout
    assert "- NoTabs (all files) - Tabs not allowed anywhere." in result.stdout
    assert "- BadClassName (.cs) - C#: the class name must match the file name." in result.stdout
