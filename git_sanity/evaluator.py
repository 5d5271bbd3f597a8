"""Per-file rule dispatch."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path, PurePath

from git_sanity.classify import FileKind, FileReadError, classify_file
from git_sanity.rules.base import Diagnostic, RuleInstance, SourceFile

logger = logging.getLogger(__name__)

Loader = Callable[[str], SourceFile]
Classifier = Callable[[str], FileKind]


def split_lines(text: str) -> tuple[str, ...]:
    """Split on CRLF, LF and CR alike; empty text has no lines."""
    if not text:
        return ()
    return tuple(text.replace("\r\n", "\n").replace("\r", "\n").split("\n"))


def load_source(path: str) -> SourceFile:
    """Read a whole file without translating its newlines."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise FileReadError(f"Cannot read file {path}: {exc.strerror or exc}") from exc
    text = data.decode("utf-8", errors="replace")
    return SourceFile(path=path, text=text, lines=split_lines(text))


def canonical_path(path: str | os.PathLike[str]) -> str:
    return os.path.normpath(os.path.abspath(path))


def evaluate_files(
    rules: list[RuleInstance],
    paths: Iterable[str | os.PathLike[str]],
    *,
    loader: Loader = load_source,
    classifier: Classifier = classify_file,
) -> Iterator[Diagnostic]:
    """Run ``rules`` over ``paths`` and yield diagnostics file by file, in rule order."""
    for raw_path in paths:
        extension = PurePath(raw_path).suffix
        path = canonical_path(raw_path)
        kind = classifier(path)
        source: SourceFile | None = None

        for rule in rules:
            definition = rule.definition
            if not definition.matches_extension(extension):
                continue
            if not definition.matches_kind(kind):
                logger.debug("skipping %s for %s file %s", rule.name, kind.value, path)
                continue

            if source is None:
                logger.debug("loading %s for %s", path, rule.describe())
                source = loader(path)

            yield from rule.check(source)
