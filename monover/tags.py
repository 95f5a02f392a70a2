"""Per-project release tags and the commits made since them.

A project named P may be tagged ``P-vX.Y.Z`` or ``P-X.Y.Z``. The ``-v``
form wins: once any ``P-v*`` tag exists, ``P-*`` tags are never consulted,
even if one of them is newer.
"""

from __future__ import annotations

from pathlib import Path

from .vcs import count_commits, list_tags


def tag_patterns(project_name: str) -> tuple[str, str]:
    """Return the (preferred, fallback) tag glob patterns for a project."""
    return f"{project_name}-v*", f"{project_name}-*"


def most_recent_tag(root: Path | None, project_name: str) -> str | None:
    """Find the most recently created tag for a project.

    Args:
        root: Repository root, or None outside a repository (no tags).
        project_name: Project directory name.

    Returns:
        The newest tag matching the preferred pattern if there is one,
        else the newest matching the fallback pattern, else None.
    """
    if root is None:
        return None
    for pattern in tag_patterns(project_name):
        tags = list_tags(root, pattern)
        if tags:
            return tags[0]
    return None


def version_from_tag(project_name: str, tag: str) -> str:
    """Strip the project prefix from a tag name.

    The result is the raw version text; it is not validated.

    Examples:
        version_from_tag("core", "core-v1.2.0") → "1.2.0"
        version_from_tag("core", "core-1.2.0") → "1.2.0"
    """
    for prefix in (f"{project_name}-v", f"{project_name}-"):
        if tag.startswith(prefix):
            return tag[len(prefix) :]
    return tag


def commits_since(root: Path | None, tag: str | None, path_filter: str) -> int | None:
    """Count commits since ``tag`` that touch ``path_filter``.

    Returns None when there is no tag (or no repository) to count from;
    callers decide what that means.
    """
    if root is None or tag is None:
        return None
    return count_commits(root, "HEAD", from_ref=tag, path_filter=path_filter)
