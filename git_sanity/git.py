"""Git subprocess helpers."""

from __future__ import annotations

from pathlib import Path
from subprocess import CalledProcessError, run


class GitError(RuntimeError):
    """Raised when git command execution fails."""


GIT_DIR_NAME = ".git"


def find_repo_root(start: Path) -> Path:
    """Walk up from ``start`` until a directory containing ``.git/`` is found."""
    start = start.resolve()
    for candidate in (start, *start.parents):
        if (candidate / GIT_DIR_NAME).is_dir():
            return candidate
    raise GitError("Not a git repository")


def get_staged_files(repo: Path) -> list[str]:
    """Return modified-and-staged paths, relative to the repository root."""
    return _split_z(_run_git(repo, ["diff", "--name-only", "-z", "--diff-filter=d", "--cached"]))


def get_unstaged_files(repo: Path) -> list[str]:
    """Return modified-but-unstaged paths, relative to the repository root."""
    return _split_z(_run_git(repo, ["diff", "--name-only", "-z", "--diff-filter=d"]))


def get_untracked_files(repo: Path) -> list[str]:
    """Return new files that are not ignored."""
    return _split_z(_run_git(repo, ["ls-files", "-z", "--others", "--exclude-standard"]))


def _split_z(output: str) -> list[str]:
    return [item for item in output.split("\0") if item]


def _run_git(repo: Path, args: list[str]) -> str:
    try:
        completed = run(
            ["git", *args],
            cwd=repo,
            check=True,
            capture_output=True,
            text=True,
        )
    except CalledProcessError as exc:
        stderr = (exc.stderr or "").strip()
        raise GitError(stderr or f"git {' '.join(args)} failed") from exc
    except OSError as exc:
        raise GitError(f"Cannot execute git: {exc}") from exc

    return completed.stdout
