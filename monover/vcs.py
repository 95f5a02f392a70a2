"""Git queries used by the version resolver.

Every function takes the repository root explicitly; nothing is resolved
from the process working directory.
"""

from __future__ import annotations

from pathlib import Path

from .shell import git


def find_repo_root(path: Path) -> Path | None:
    """Return the top-level directory of the repository containing ``path``.

    Returns None when ``path`` is not inside a git work tree.
    """
    start = path if path.is_dir() else path.parent
    top = git("rev-parse", "--show-toplevel", cwd=start, check=False)
    return Path(top) if top else None


def list_tags(root: Path, pattern: str) -> list[str]:
    """List tags matching a glob ``pattern``, most recently created first."""
    tags = git("tag", "--list", pattern, "--sort=-creatordate", cwd=root, check=False)
    return tags.splitlines() if tags else []


def count_commits(
    root: Path,
    to_ref: str = "HEAD",
    from_ref: str | None = None,
    path_filter: str | None = None,
) -> int:
    """Count commits reachable from ``to_ref`` but not from ``from_ref``.

    Args:
        root: Repository root.
        to_ref: Ref to count up to (default HEAD).
        from_ref: Exclusive starting ref, or None to count all history.
        path_filter: Only count commits touching this path (relative to root).
    """
    rev = f"{from_ref}..{to_ref}" if from_ref else to_ref
    args = ["rev-list", "--count", rev]
    if path_filter:
        args += ["--", path_filter]
    return int(git(*args, cwd=root) or 0)
