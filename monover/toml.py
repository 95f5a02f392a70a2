"""TOML reading utilities.

Uses tomlkit so manifests are read with the same parser that preserves
formatting elsewhere in the toolchain.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from packaging.utils import canonicalize_name


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_project_name(doc: tomlkit.TOMLDocument, fallback: str) -> str:
    """Extract the canonical package name from [project].name.

    Names are normalized per PEP 503 (lowercase, hyphens instead of
    underscores) for consistent comparison.

    Args:
        doc: Parsed pyproject.toml document.
        fallback: Value to return if name is not specified.
    """
    return canonicalize_name(doc.get("project", {}).get("name", fallback))


def get_workspace_member_globs(doc: tomlkit.TOMLDocument) -> list[str]:
    """Extract workspace member glob patterns from [tool.uv.workspace].

    Returns an empty list when the document declares no workspace.
    """
    members = doc.get("tool", {}).get("uv", {}).get("workspace", {}).get("members")
    return list(members) if members else []


def get_tool_table(doc: tomlkit.TOMLDocument, name: str = "monover") -> dict[str, Any]:
    """Return [tool.<name>] as a plain dict (empty if missing)."""
    table = doc.get("tool", {}).get(name, {})
    return table.unwrap() if hasattr(table, "unwrap") else dict(table)
