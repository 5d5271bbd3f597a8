"""Rule configuration loading for git-sanity-checker."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from git_sanity.rules import RuleInstance, UnknownRuleError, resolve_rules

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("git-sanity-checker.cfg", ".git-sanity-checker.cfg")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("git-sanity-checker", "git_sanity")
COMMENT_PREFIXES = ("#", "//")


class ConfigError(ValueError):
    """Raised when no usable rule configuration can be loaded."""


@dataclass(slots=True)
class RuleConfig:
    """Resolved rule list and where it came from."""

    rules: list[RuleInstance] = field(default_factory=list)
    source: str | None = None


def load_rule_config(base_dir: Path, config_path: Path | None = None) -> RuleConfig:
    """Load rules from an explicit path or from files in ``base_dir``, with precedence."""
    base_dir = base_dir.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (base_dir / config_path)
        if not resolved.exists():
            raise ConfigError(f"Config file does not exist: {resolved}")
        if resolved.suffix == ".toml":
            return _from_rule_lines(_toml_rule_lines(resolved), source=resolved)
        return _from_rule_lines(parse_config_lines(_read_text(resolved)), source=resolved)

    for filename in CONFIG_FILENAMES:
        resolved = base_dir / filename
        if resolved.is_file():
            return _from_rule_lines(parse_config_lines(_read_text(resolved)), source=resolved)

    pyproject_path = base_dir / PYPROJECT_FILENAME
    if pyproject_path.is_file():
        section = _find_pyproject_tool_section(_load_toml(pyproject_path))
        if section is not None:
            lines = _as_str_list(section.get("rules"), f"{pyproject_path}: rules")
            return _from_rule_lines(lines, source=pyproject_path)

    raise ConfigError(f"No {CONFIG_FILENAMES[0]} found in {base_dir}")


def parse_config_lines(text: str) -> list[str]:
    """Return rule references, skipping blank lines and ``#`` or ``//`` comments."""
    lines: list[str] = []
    for raw in text.splitlines():
        line = raw.strip(" \t")
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        lines.append(line)
    return lines


def default_config_template() -> str:
    """Return a starter config listing every rule, with the opinionated ones commented out."""
    return "\n".join(
        [
            "# Config file for git-sanity-checker.",
            "# One rule per line. Comment out unwanted rules with '#' or '//'.",
            "",
            "# Does nothing. Prevents the config file from being empty.",
            "#DoNothing",
            "",
            "#NoTabs",
            "#NoLeadingSpaces",
            "TabsVsSpacesOnly",
            "#ConsistentNewlines",
            "ConsistentIndentWidth",
            "",
            "# C# only.",
            "BadNameSpace",
            "BadClassName",
            "NoMultiplePublicClasses",
            "NeedSpaceAfterKeyword",
            "",
            "# Pick at most one newline convention.",
            "#WindowsNewlines",
            "#LinuxNewlines",
            "#OldMacNewlines",
            "",
        ]
    )


def _from_rule_lines(lines: list[str], *, source: Path) -> RuleConfig:
    try:
        rules = resolve_rules(lines)
    except UnknownRuleError as exc:
        raise ConfigError(f"{exc} (in {source})") from exc
    if not rules:
        raise ConfigError(f'No rules are loaded from "{source}"')
    logger.debug("loaded %d rules from %s", len(rules), source)
    return RuleConfig(rules=rules, source=str(source))


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc.strerror or exc}") from exc


def _toml_rule_lines(path: Path) -> list[str]:
    loaded = _load_toml(path)
    section = _find_pyproject_tool_section(loaded)
    mapping = section if section is not None else loaded
    return _as_str_list(mapping.get("rules"), f"{path}: rules")


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc.strerror or exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _as_str_list(value: Any, field_name: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{field_name} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ConfigError(f"{field_name} must be a list of strings")
        stripped = item.strip(" \t")
        if stripped:
            items.append(stripped)
    return items
