"""CLI entrypoint for git-sanity-checker."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from git_sanity import __version__
from git_sanity.classify import FileReadError
from git_sanity.config import CONFIG_FILENAMES, ConfigError, default_config_template, load_rule_config
from git_sanity.evaluator import evaluate_files
from git_sanity.git import GitError
from git_sanity.output import render_diagnostic, render_rule_list
from git_sanity.rules import list_rule_info
from git_sanity.sources import list_candidate_files

logger = logging.getLogger(__name__)

FATAL_ERRORS = (ConfigError, FileReadError, GitError)

app = typer.Typer(
    name="git-sanity-checker",
    add_completion=False,
    help="Report style and hygiene problems in changed files. Advisory only: never fails a commit.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.command()
def check_command(
    paths: Annotated[
        list[str] | None,
        typer.Argument(
            help="Files, directories or glob patterns. Defaults to the git working tree changes.",
            show_default=False,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to a rule config file (.cfg lines or .toml)."),
    ] = None,
    list_rules: Annotated[
        bool, typer.Option("--list-rules", help="List available rules and exit.")
    ] = False,
    init_config: Annotated[
        bool,
        typer.Option("--init-config", help=f"Write a starter {CONFIG_FILENAMES[0]} and exit."),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Check files against the configured rules and print one line per problem."""
    _ = version
    _configure_logging(verbose)

    if list_rules:
        typer.echo(render_rule_list(list_rule_info()))
        return

    cwd = Path.cwd()
    if init_config:
        _write_starter_config(cwd / CONFIG_FILENAMES[0])
        return

    try:
        candidates = list_candidate_files(paths or [], cwd)
        rule_config = load_rule_config(
            candidates.base_dir, config_path=cwd / config_file if config_file else None
        )
        logger.debug(
            "checking %d files with rules %s",
            len(candidates.paths),
            ", ".join(rule.describe() for rule in rule_config.rules),
        )
        for diagnostic in evaluate_files(rule_config.rules, candidates.paths):
            typer.echo(render_diagnostic(diagnostic))
    except FATAL_ERRORS as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def main() -> None:
    """Console script entrypoint."""
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _write_starter_config(out_path: Path) -> None:
    if out_path.exists():
        typer.echo(f"error: Refusing to overwrite existing file: {out_path}", err=True)
        raise typer.Exit(code=1)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")
