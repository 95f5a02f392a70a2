"""Locate project directories in a repository tree.

A project directory is any directory holding a file that matches the
configured manifest pattern. When the root pyproject.toml declares a uv
workspace, its member globs define the candidates; otherwise the whole tree
is scanned.
"""

from __future__ import annotations

import fnmatch
import glob
from pathlib import Path

from .config import ResolverConfig
from .models import ProjectDirectory
from .toml import get_project_name, get_workspace_member_globs, load_pyproject


def discover_projects(root: Path, config: ResolverConfig) -> list[ProjectDirectory]:
    """Find every project directory under ``root``.

    Args:
        root: Directory to search from (usually the repository root).
        config: Manifest pattern and exclude patterns.

    Returns:
        Projects sorted by path relative to ``root``. The root itself is
        never a project.
    """
    root = root.resolve()
    member_dirs = _workspace_member_dirs(root, config) or _scan(root, config)

    projects: list[ProjectDirectory] = []
    for d in sorted(set(member_dirs), key=lambda p: p.relative_to(root).as_posix()):
        rel = d.relative_to(root).as_posix()
        if any(fnmatch.fnmatch(rel, pattern) for pattern in config.exclude):
            continue
        manifest = _find_manifest(d, config.manifest)
        if manifest is None:
            continue
        projects.append(
            ProjectDirectory(
                path=d,
                name=d.name,
                package_name=_package_name(manifest, d.name),
                manifest=manifest.name,
            )
        )
    return projects


def _find_manifest(d: Path, pattern: str) -> Path | None:
    matches = sorted(p for p in d.glob(pattern) if p.is_file())
    return matches[0] if matches else None


def _workspace_member_dirs(root: Path, config: ResolverConfig) -> list[Path]:
    """Expand [tool.uv.workspace].members globs, if the root declares any."""
    root_manifest = root / "pyproject.toml"
    if not root_manifest.is_file():
        return []
    member_globs = get_workspace_member_globs(load_pyproject(root_manifest))

    member_dirs: list[Path] = []
    for pattern in member_globs:
        for match in sorted(glob.glob(str(root / pattern))):
            p = Path(match).resolve()
            if p.is_dir() and _find_manifest(p, config.manifest):
                member_dirs.append(p)
    return member_dirs


def _scan(root: Path, config: ResolverConfig) -> list[Path]:
    """Walk the tree for manifest files, skipping hidden directories."""
    found: list[Path] = []
    for manifest in root.rglob(config.manifest):
        d = manifest.parent
        if d == root or not manifest.is_file():
            continue
        if any(part.startswith(".") for part in d.relative_to(root).parts):
            continue
        found.append(d)
    return found


def _package_name(manifest: Path, fallback: str) -> str:
    """Read [project].name when the manifest is a pyproject.toml."""
    if manifest.name != "pyproject.toml":
        return fallback
    return get_project_name(load_pyproject(manifest), fallback)
