"""Candidate file selection from explicit arguments or the git working tree."""

from __future__ import annotations

import glob
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from git_sanity.git import (
    GIT_DIR_NAME,
    find_repo_root,
    get_staged_files,
    get_unstaged_files,
    get_untracked_files,
)

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")


@dataclass(slots=True)
class CandidateFiles:
    """Files to check, plus the directory the run is anchored at."""

    paths: list[str]
    base_dir: Path


def list_candidate_files(args: list[str], cwd: Path) -> CandidateFiles:
    """Use explicit paths when given, otherwise the repository's changed files."""
    if args:
        return CandidateFiles(paths=expand_arguments(args, cwd), base_dir=cwd)

    repo = find_repo_root(cwd)
    return CandidateFiles(paths=list_changed_files(repo), base_dir=repo)


def list_changed_files(repo: Path) -> list[str]:
    """Staged, unstaged and untracked files, in that order, without duplicates.

    Entries that are not regular files, such as submodules or nested
    repositories, are skipped.
    """
    relative = _dedupe(get_staged_files(repo) + get_unstaged_files(repo) + get_untracked_files(repo))
    logger.debug("git reported %d changed paths under %s", len(relative), repo)
    files: list[str] = []
    for item in relative:
        target = repo / item
        if not target.is_file():
            logger.debug("skipping %s: not a regular file", target)
            continue
        files.append(str(target))
    return files


def expand_arguments(args: list[str], cwd: Path) -> list[str]:
    """Expand globs and directories into regular files.

    Directories are walked depth first with sorted entries and ``.git``
    directories are skipped. The result keeps argument order.
    """
    pending: list[str] = []
    for arg in args:
        if _is_glob(arg):
            pending.extend(_expand_glob(arg, cwd))
        else:
            pending.append(arg)

    files: list[str] = []
    while pending:
        current = pending.pop()
        target = _resolve(current, cwd)
        if target.is_file():
            files.append(str(target))
            continue
        if not target.is_dir():
            logger.warning("skipping %s: not a regular file or directory", current)
            continue
        if target.name == GIT_DIR_NAME:
            continue
        try:
            names = sorted(os.listdir(target))
        except OSError as exc:
            logger.warning("skipping %s: %s", current, exc.strerror or exc)
            continue
        pending.extend(os.path.join(current, name) for name in names)

    files.reverse()
    return files


def _expand_glob(pattern: str, cwd: Path) -> list[str]:
    if os.path.isabs(pattern):
        return sorted(glob.glob(pattern, recursive=True))
    return sorted(glob.glob(pattern, root_dir=cwd, recursive=True))


def _resolve(path: str, cwd: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else cwd / candidate


def _is_glob(arg: str) -> bool:
    return any(char in GLOB_CHARS for char in arg)


def _dedupe(items: list[str]) -> list[str]:
    seen: set[str] = set()
    output: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        output.append(item)
    return output
