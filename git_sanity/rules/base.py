"""Base rule protocol, rule definitions and the diagnostic model."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from git_sanity.classify import FileKind


@dataclass(frozen=True, slots=True)
class SourceFile:
    """File content handed to rule checks.

    ``text`` keeps the original newlines so newline rules can tell CRLF, LF and
    CR apart; ``lines`` has all three conventions normalized away.
    """

    path: str
    text: str
    lines: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single failure reported by a rule."""

    rule: str
    path: str
    message: str
    line: int | None = None

    def render(self) -> str:
        if self.line is None:
            return f"{self.path}: {self.message}"
        return f"{self.path}:{self.line}: {self.message}"


class Rule(Protocol):
    """Protocol for line/file scanning rules."""

    rule_id: str

    def check(self, source: SourceFile) -> list[Diagnostic]:
        """Scan one file and return its diagnostics."""


Check = Callable[[SourceFile], list[Diagnostic]]


@dataclass(frozen=True, slots=True)
class RuleDefinition:
    """Catalog entry: a named check plus the files it applies to."""

    name: str
    description: str
    check: Check
    extensions: frozenset[str] = frozenset()
    file_kinds: frozenset[FileKind] = frozenset({FileKind.TEXT})

    @property
    def applies_to_text(self) -> bool:
        return FileKind.TEXT in self.file_kinds

    @property
    def applies_to_binary(self) -> bool:
        return FileKind.BINARY in self.file_kinds

    def matches_extension(self, extension: str) -> bool:
        return not self.extensions or extension in self.extensions

    def matches_kind(self, kind: FileKind) -> bool:
        return kind in self.file_kinds


@dataclass(frozen=True, slots=True)
class RuleInstance:
    """A catalog rule as referenced by one config line."""

    definition: RuleDefinition
    argument: str | None = None

    @property
    def name(self) -> str:
        return self.definition.name

    def check(self, source: SourceFile) -> list[Diagnostic]:
        return self.definition.check(source)

    def describe(self) -> str:
        if self.argument is None:
            return self.name
        return f"{self.name} {self.argument}"


def line_diagnostic(rule_id: str, source: SourceFile, line_number: int, message: str) -> Diagnostic:
    """Build a diagnostic pinned to a 1-based line number."""
    return Diagnostic(rule=rule_id, path=source.path, message=message, line=line_number)


def file_diagnostic(rule_id: str, source: SourceFile, message: str) -> Diagnostic:
    """Build a diagnostic for the file as a whole."""
    return Diagnostic(rule=rule_id, path=source.path, message=message)


def first_bad_line(
    rule_id: str,
    source: SourceFile,
    message: str,
    is_bad: Callable[[str], bool],
) -> list[Diagnostic]:
    """Report the first line for which ``is_bad`` holds, if any."""
    for index, line in enumerate(source.lines, start=1):
        if is_bad(line):
            return [line_diagnostic(rule_id, source, index, message)]
    return []


class DoNothingRule:
    """Does nothing. Prevents the config file from being empty."""

    rule_id = "DoNothing"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        return []
