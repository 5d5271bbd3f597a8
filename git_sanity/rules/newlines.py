"""Newline convention rules.

These work on ``SourceFile.text`` because ``lines`` has already lost the
difference between CRLF, LF and CR.
"""

from __future__ import annotations

from git_sanity.rules.base import Diagnostic, SourceFile, file_diagnostic

CRLF = "\r\n"
LF = "\n"
CR = "\r"


class ConsistentNewlinesRule:
    """All line endings within each file must be of the same type."""

    rule_id = "ConsistentNewlines"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        styles = newline_styles(source.text)
        if len(styles) > 1:
            return [file_diagnostic(self.rule_id, source, "File uses inconsistent newlines")]
        return []


class WindowsNewlinesRule:
    """Allow CR/LF line endings only."""

    rule_id = "WindowsNewlines"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        remainder = source.text.replace(CRLF, "")
        if LF in remainder:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Windows (Linux) newlines"
                )
            ]
        if CR in remainder:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Windows (Old Mac) newlines"
                )
            ]
        return []


class LinuxNewlinesRule:
    """Allow LF line endings only."""

    rule_id = "LinuxNewlines"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        if CRLF in source.text:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Linux (Windows) newlines"
                )
            ]
        if CR in source.text:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Linux (Old Mac) newlines"
                )
            ]
        return []


class OldMacNewlinesRule:
    """Allow CR line endings only."""

    rule_id = "OldMacNewlines"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        if CRLF in source.text:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Old Mac (Windows) newlines"
                )
            ]
        if LF in source.text:
            return [
                file_diagnostic(
                    self.rule_id, source, "File contains non-Old Mac (Linux) newlines"
                )
            ]
        return []


def newline_styles(text: str) -> set[str]:
    """Return which of CRLF, bare LF and bare CR occur in ``text``."""
    styles: set[str] = set()
    if CRLF in text:
        styles.add("crlf")
    remainder = text.replace(CRLF, "")
    if LF in remainder:
        styles.add("lf")
    if CR in remainder:
        styles.add("cr")
    return styles
