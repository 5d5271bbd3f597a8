"""Rule catalog and config-line resolution."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from git_sanity.classify import FileKind
from git_sanity.rules.base import (
    Diagnostic,
    DoNothingRule,
    Rule,
    RuleDefinition,
    RuleInstance,
    SourceFile,
)
from git_sanity.rules.csharp import (
    CSHARP_EXTENSIONS,
    BadClassNameRule,
    BadNameSpaceRule,
    NeedSpaceAfterKeywordRule,
    NoMultiplePublicClassesRule,
)
from git_sanity.rules.newlines import (
    ConsistentNewlinesRule,
    LinuxNewlinesRule,
    OldMacNewlinesRule,
    WindowsNewlinesRule,
)
from git_sanity.rules.whitespace import (
    ConsistentIndentWidthRule,
    NoLeadingSpacesRule,
    NoTabsRule,
    TabsVsSpacesOnlyRule,
)

TEXT_ONLY = frozenset({FileKind.TEXT})


class UnknownRuleError(ValueError):
    """Raised when a config line names a rule that is not in the catalog."""


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing."""

    name: str
    description: str
    extensions: tuple[str, ...]
    file_kinds: tuple[str, ...]


def _define(
    rule_cls: type[Rule],
    *,
    extensions: frozenset[str] = frozenset(),
    file_kinds: frozenset[FileKind] = TEXT_ONLY,
) -> RuleDefinition:
    instance = rule_cls()
    return RuleDefinition(
        name=instance.rule_id,
        description=(rule_cls.__doc__ or "").strip(),
        check=instance.check,
        extensions=extensions,
        file_kinds=file_kinds,
    )


def build_catalog() -> Mapping[str, RuleDefinition]:
    """Build the read-only name -> definition mapping of every built-in rule."""
    definitions = [
        _define(DoNothingRule),
        _define(NoTabsRule),
        _define(NoLeadingSpacesRule),
        _define(TabsVsSpacesOnlyRule),
        _define(ConsistentNewlinesRule),
        _define(ConsistentIndentWidthRule),
        _define(BadNameSpaceRule, extensions=CSHARP_EXTENSIONS),
        _define(BadClassNameRule, extensions=CSHARP_EXTENSIONS),
        _define(NoMultiplePublicClassesRule, extensions=CSHARP_EXTENSIONS),
        _define(WindowsNewlinesRule),
        _define(LinuxNewlinesRule),
        _define(OldMacNewlinesRule),
        _define(NeedSpaceAfterKeywordRule, extensions=CSHARP_EXTENSIONS),
    ]
    registry: dict[str, RuleDefinition] = {}
    for definition in definitions:
        if definition.name in registry:
            raise ValueError(f"Duplicate rule name: {definition.name}")
        registry[definition.name] = definition
    return MappingProxyType(registry)


RULE_CATALOG: Mapping[str, RuleDefinition] = build_catalog()


def resolve_rule(line: str, catalog: Mapping[str, RuleDefinition] = RULE_CATALOG) -> RuleInstance:
    """Turn ``<RuleName>`` or ``<RuleName> <argument>`` into a rule instance."""
    name, space, argument = line.partition(" ")
    definition = catalog.get(name)
    if definition is None:
        raise UnknownRuleError(f"Unrecognized rule: {name}")
    return RuleInstance(definition=definition, argument=argument if space else None)


def resolve_rules(
    lines: list[str], catalog: Mapping[str, RuleDefinition] = RULE_CATALOG
) -> list[RuleInstance]:
    """Resolve config lines in order."""
    return [resolve_rule(line, catalog) for line in lines]


def list_rule_info(catalog: Mapping[str, RuleDefinition] = RULE_CATALOG) -> list[RuleInfo]:
    """Return metadata for all catalog rules, in registration order."""
    return [
        RuleInfo(
            name=definition.name,
            description=definition.description,
            extensions=tuple(sorted(definition.extensions)),
            file_kinds=tuple(sorted(kind.value for kind in definition.file_kinds)),
        )
        for definition in catalog.values()
    ]


__all__ = [
    "RULE_CATALOG",
    "Diagnostic",
    "DoNothingRule",
    "RuleDefinition",
    "RuleInfo",
    "RuleInstance",
    "SourceFile",
    "UnknownRuleError",
    "build_catalog",
    "list_rule_info",
    "resolve_rule",
    "resolve_rules",
]
