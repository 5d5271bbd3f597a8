"""Rule dispatch tests for the per-file evaluation loop."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from git_sanity.classify import FileKind, FileReadError
from git_sanity.evaluator import canonical_path, evaluate_files, load_source
from git_sanity.rules import resolve_rules
from git_sanity.rules.base import Diagnostic, RuleDefinition, RuleInstance, SourceFile


class _CountingCheck:
    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        self.message = message
        self.calls: list[str] = []

    def __call__(self, source: SourceFile) -> list[Diagnostic]:
        self.calls.append(source.path)
        if self.message is None:
            return []
        return [Diagnostic(rule=self.name, path=source.path, message=self.message)]


class _CountingLoader:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, path: str) -> SourceFile:
        self.calls.append(path)
        return SourceFile(path=path, text="x\n", lines=("x", ""))


def _instance(
    check: _CountingCheck,
    *,
    extensions: frozenset[str] = frozenset(),
    file_kinds: frozenset[FileKind] = frozenset({FileKind.TEXT}),
) -> RuleInstance:
    definition = RuleDefinition(
        name=check.name,
        description="",
        check=check,
        extensions=extensions,
        file_kinds=file_kinds,
    )
    return RuleInstance(definition=definition)


def _classifier(kinds: dict[str, FileKind]):
    def classify(path: str) -> FileKind:
        return kinds[os.path.basename(path)]

    return classify


def test_rules_never_run_on_mismatched_extension_or_kind() -> None:
    cs_only = _CountingCheck("CsOnly")
    binary_only = _CountingCheck("BinaryOnly")
    loader = _CountingLoader()
    classify = _classifier({"a.txt": FileKind.TEXT, "b.bin": FileKind.BINARY})

    diagnostics = list(
        evaluate_files(
            [
                _instance(cs_only, extensions=frozenset({".cs"})),
                _instance(binary_only, file_kinds=frozenset({FileKind.BINARY})),
            ],
            ["a.txt"],
            loader=loader,
            classifier=classify,
        )
    )

    assert diagnostics == []
    assert cs_only.calls == []
    assert binary_only.calls == []
    assert loader.calls == []


def test_binary_rule_runs_only_on_binary_files() -> None:
    binary_only = _CountingCheck("BinaryOnly")
    classify = _classifier({"a.txt": FileKind.TEXT, "b.bin": FileKind.BINARY})

    list(
        evaluate_files(
            [_instance(binary_only, file_kinds=frozenset({FileKind.BINARY}))],
            ["a.txt", "b.bin"],
            loader=_CountingLoader(),
            classifier=classify,
        )
    )

    assert [os.path.basename(path) for path in binary_only.calls] == ["b.bin"]


def test_file_is_loaded_once_for_many_rules() -> None:
    checks = [_CountingCheck(f"Rule{index}") for index in range(4)]
    loader = _CountingLoader()
    classify = _classifier({"one.cs": FileKind.TEXT, "two.cs": FileKind.TEXT})

    list(
        evaluate_files(
            [_instance(check) for check in checks],
            ["one.cs", "two.cs"],
            loader=loader,
            classifier=classify,
        )
    )

    assert [os.path.basename(path) for path in loader.calls] == ["one.cs", "two.cs"]
    assert all(len(check.calls) == 2 for check in checks)


def test_diagnostics_follow_file_then_rule_order() -> None:
    first = _CountingCheck("First", "first failed")
    second = _CountingCheck("Second", "second failed")
    classify = _classifier({"a.txt": FileKind.TEXT, "b.txt": FileKind.TEXT})

    diagnostics = list(
        evaluate_files(
            [_instance(first), _instance(second)],
            ["a.txt", "b.txt"],
            loader=_CountingLoader(),
            classifier=classify,
        )
    )

    assert [(os.path.basename(item.path), item.rule) for item in diagnostics] == [
        ("a.txt", "First"),
        ("a.txt", "Second"),
        ("b.txt", "First"),
        ("b.txt", "Second"),
    ]


def test_paths_are_canonicalized(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "a.txt").write_bytes(b"a\tb\n")
    monkeypatch.chdir(tmp_path)

    diagnostics = list(evaluate_files(resolve_rules(["NoTabs"]), ["./sub/../sub/a.txt"]))

    assert [item.render() for item in diagnostics] == [
        f"{tmp_path / 'sub' / 'a.txt'}:1: Tabs not allowed"
    ]
    assert canonical_path("./sub/../sub/a.txt") == str(tmp_path / "sub" / "a.txt")


def test_real_files_with_builtin_rules(tmp_path: Path) -> None:
    text_file = tmp_path / "Widget.cs"
    text_file.write_bytes(b"public class Gadget\r\n{\r\n\tif(x)\n}\r\n")
    binary_file = tmp_path / "blob.cs"
    binary_file.write_bytes(b"\x00\x01\x02\tpublic class Nope\n")

    rules = resolve_rules(["ConsistentNewlines", "BadClassName", "NeedSpaceAfterKeyword"])
    rendered = [item.render() for item in evaluate_files(rules, [text_file, binary_file])]

    assert rendered == [
        f"{text_file}: File uses inconsistent newlines",
        f"{text_file}:1: Class name Gadget should be Widget instead",
        f"{text_file}:3: Need space between keyword if and open paren",
    ]


def test_load_source_keeps_raw_newlines(tmp_path: Path) -> None:
    target = tmp_path / "mixed.txt"
    target.write_bytes(b"a\r\nb\rc\n")

    source = load_source(str(target))

    assert source.text == "a\r\nb\rc\n"
    assert source.lines == ("a", "b", "c", "")


def test_unreadable_file_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(FileReadError):
        list(evaluate_files(resolve_rules(["NoTabs"]), [tmp_path / "missing.txt"]))
