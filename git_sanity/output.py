"""Output rendering."""

from __future__ import annotations

import click

from git_sanity.rules import RuleInfo
from git_sanity.rules.base import Diagnostic


def render_diagnostic(diagnostic: Diagnostic) -> str:
    """Render ``path:line: message`` with the location highlighted.

    ``click.echo`` drops the styling when stdout is not a terminal, so piped
    output matches ``Diagnostic.render()`` exactly.
    """
    location = diagnostic.path if diagnostic.line is None else f"{diagnostic.path}:{diagnostic.line}"
    return f"{click.style(location, bold=True)}: {click.style(diagnostic.message, fg='yellow')}"


def render_rule_list(rules: list[RuleInfo]) -> str:
    lines = [click.style("Available rules:", bold=True)]
    for item in rules:
        scope = ", ".join(item.extensions) if item.extensions else "all files"
        lines.append(f"- {item.name} ({scope}) - {item.description}")
    return "\n".join(lines)
