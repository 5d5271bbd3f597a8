"""C# source-structure rules.

These use line-prefix heuristics on trimmed lines rather than a parser.
"""

from __future__ import annotations

import re
from pathlib import PureWindowsPath

from git_sanity.rules.base import Diagnostic, SourceFile, line_diagnostic

CSHARP_EXTENSIONS = frozenset({".cs"})

KEYWORDS_NEEDING_SPACED_PARENS = (
    "catch",
    "for",
    "foreach",
    "if",
    "lock",
    "switch",
    "using",
    "while",
)

CLASS_PREFIXES = ("class ", "public class ", "internal class ")
NAMESPACE_PREFIX = "namespace "
PUBLIC_CLASS_PREFIX = "public class "

_NAME_TERMINATORS = re.compile(r"[{;:<(]")


class BadNameSpaceRule:
    """C#: the namespace must match the file's directory location."""

    rule_id = "BadNameSpace"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        expected: str | None = None

        for index, raw_line in enumerate(source.lines, start=1):
            line = _trim(raw_line)
            if not line.startswith(NAMESPACE_PREFIX):
                continue
            namespace = declared_name(line[len(NAMESPACE_PREFIX) :])
            if not namespace:
                continue

            if expected is None:
                expected = path_as_namespace(source.path)

            if not is_namespace_suffix(expected, namespace):
                diagnostics.append(
                    line_diagnostic(
                        self.rule_id,
                        source,
                        index,
                        f"Namespace {namespace} is not a suffix of {expected}",
                    )
                )

        return diagnostics


class BadClassNameRule:
    """C#: the class name must match the file name."""

    rule_id = "BadClassName"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        expected = PureWindowsPath(source.path).stem
        diagnostics: list[Diagnostic] = []

        for index, raw_line in enumerate(source.lines, start=1):
            line = _trim(raw_line)
            prefix = next((item for item in CLASS_PREFIXES if line.startswith(item)), None)
            if prefix is None:
                continue

            class_name = declared_name(line[len(prefix) :])
            if class_name and class_name != expected:
                diagnostics.append(
                    line_diagnostic(
                        self.rule_id,
                        source,
                        index,
                        f"Class name {class_name} should be {expected} instead",
                    )
                )

        return diagnostics


class NoMultiplePublicClassesRule:
    """C#: each file cannot have more than one public class."""

    rule_id = "NoMultiplePublicClasses"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        count = 0
        for index, raw_line in enumerate(source.lines, start=1):
            if not _trim(raw_line).startswith(PUBLIC_CLASS_PREFIX):
                continue
            count += 1
            if count > 1:
                return [
                    line_diagnostic(
                        self.rule_id,
                        source,
                        index,
                        "Cannot have multiple public classes per file",
                    )
                ]
        return []


class NeedSpaceAfterKeywordRule:
    """C#: selected keywords need a space before the opening paren, e.g. ``if (`` not ``if(``."""

    rule_id = "NeedSpaceAfterKeyword"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for index, raw_line in enumerate(source.lines, start=1):
            line = _trim(raw_line)
            for keyword in KEYWORDS_NEEDING_SPACED_PARENS:
                if line.startswith(f"{keyword}("):
                    diagnostics.append(
                        line_diagnostic(
                            self.rule_id,
                            source,
                            index,
                            f"Need space between keyword {keyword} and open paren",
                        )
                    )
        return diagnostics


def path_as_namespace(path: str) -> str:
    """Derive a dotted namespace from the directory part of ``path``.

    ``C:\\src\\app\\Models\\User.cs`` becomes ``src.app.Models``.
    """
    directory = path.replace("\\", "/").rpartition("/")[0]
    _, colon, after = directory.partition(":")
    if colon:
        directory = after
    directory = directory.removeprefix("/")
    return directory.replace("/", ".")


def is_namespace_suffix(expected: str, namespace: str) -> bool:
    """True when ``namespace`` is a trailing dotted part of ``expected``, never the whole of it."""
    return expected.endswith(f".{namespace}")


def declared_name(rest: str) -> str:
    """Return the identifier that follows a declaration keyword.

    Anything after whitespace, ``{``, ``;``, ``:``, ``<`` or ``(`` is dropped,
    so ``Widget : Base {`` gives ``Widget``.
    """
    parts = rest.split()
    if not parts:
        return ""
    return _NAME_TERMINATORS.split(parts[0], maxsplit=1)[0]


def _trim(line: str) -> str:
    return line.strip(" \t")
