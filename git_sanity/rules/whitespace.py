"""Indentation and whitespace rules."""

from __future__ import annotations

from git_sanity.rules.base import Diagnostic, SourceFile, first_bad_line, line_diagnostic


class NoTabsRule:
    """Tabs not allowed anywhere."""

    rule_id = "NoTabs"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        return first_bad_line(self.rule_id, source, "Tabs not allowed", _contains_tab)


class NoLeadingSpacesRule:
    """Leading whitespace must be all tabs."""

    rule_id = "NoLeadingSpaces"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        return first_bad_line(
            self.rule_id, source, "Leading spaces not allowed", _has_leading_spaces
        )


class TabsVsSpacesOnlyRule:
    """Indentation must be either purely spaces or purely tabs within each file."""

    rule_id = "TabsVsSpacesOnly"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        seen_tab = False
        seen_space = False

        for index, line in enumerate(source.lines, start=1):
            for char in line:
                if char == " ":
                    if seen_tab:
                        return [
                            line_diagnostic(
                                self.rule_id,
                                source,
                                index,
                                "Found first space indent with prior tab indents",
                            )
                        ]
                    seen_space = True
                elif char == "\t":
                    if seen_space:
                        return [
                            line_diagnostic(
                                self.rule_id,
                                source,
                                index,
                                "Found first tab indent with prior space indents",
                            )
                        ]
                    seen_tab = True
                else:
                    break

        return []


class ConsistentIndentWidthRule:
    """All indents must be either a multiple of 3 or a multiple of 4, within each file."""

    rule_id = "ConsistentIndentWidth"

    def check(self, source: SourceFile) -> list[Diagnostic]:
        first_non_3: int | None = None
        first_non_4: int | None = None

        for index, line in enumerate(source.lines, start=1):
            width = leading_space_count(line)
            if first_non_3 is None and width % 3 != 0:
                first_non_3 = index
            if first_non_4 is None and width % 4 != 0:
                first_non_4 = index

        # Only a file broken under both widths fails, and the 4-space break is
        # what gets reported.
        if first_non_3 is not None and first_non_4 is not None:
            return [
                line_diagnostic(
                    self.rule_id, source, first_non_4, "File has first non 4-space indent"
                )
            ]
        return []


def leading_space_count(line: str) -> int:
    """Count spaces before the first non-space character."""
    return len(line) - len(line.lstrip(" "))


def _contains_tab(line: str) -> bool:
    return "\t" in line


def _has_leading_spaces(line: str) -> bool:
    return line.startswith(" ")
