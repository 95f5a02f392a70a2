"""Next-version resolution for a project directory.

Two sources of truth are consulted, in order:
1. The project's changelog. If it has at least one released entry, the
   latest entry is bumped as instructed by the unreleased section's
   ``+semver:`` directive (patch by default).
2. The project's most recent release tag, whose version is used verbatim.

With neither, the project has never been released and gets the bootstrap
version 0.0.1.

Prerelease versions append ``-alpha<NNNN>``, where NNNN is the number of
commits touching the project since its most recent tag. A brand-new project
(bootstrap version, no tag) counts the whole repository history instead;
any other project without a tag cannot be numbered and halts the run.

Nothing is cached: each call re-reads the changelog and re-queries git.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import semver

from .changelog import maybe_load_changelog, promote, save_changelog
from .config import ResolverConfig
from .directives import BumpKind, parse_directive
from .models import Changelog, ProjectDirectory
from .shell import fatal
from .tags import commits_since, most_recent_tag, version_from_tag
from .vcs import count_commits
from .versions import BOOTSTRAP_VERSION, bump, format_prerelease


def _load(path: Path) -> Changelog | None:
    try:
        return maybe_load_changelog(path)
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError too
        fatal(f"Cannot parse changelog {path}: {exc}")


def _instruction(changelog: Changelog) -> BumpKind:
    unreleased = changelog.unreleased
    return parse_directive(unreleased.description if unreleased else None)


def _latest_version(changelog: Changelog, path: Path) -> semver.Version | None:
    entry = changelog.latest_entry
    if entry is None:
        return None
    try:
        return entry.parsed_version
    except ValueError:
        fatal(f"Latest entry in {path} has an invalid version: {entry.version!r}")


def _untagged_version(project: ProjectDirectory, repo_root: Path | None) -> str:
    """Version for a project whose changelog has no released entry."""
    tag = most_recent_tag(repo_root, project.name)
    if tag is not None:
        return version_from_tag(project.name, tag)
    return BOOTSTRAP_VERSION


def _resolve(
    project: ProjectDirectory, repo_root: Path | None, config: ResolverConfig
) -> tuple[str, str | None]:
    """Return the next release version and the changelog's latest release."""
    changelog_path = project.path / config.changelog
    changelog = _load(changelog_path)
    # A changelog without entries has nothing to bump from
    if changelog is not None:
        latest = _latest_version(changelog, changelog_path)
        if latest is not None:
            return str(bump(latest, _instruction(changelog))), str(latest)
    return _untagged_version(project, repo_root), None


def next_release_version(
    project: ProjectDirectory,
    repo_root: Path | None,
    config: ResolverConfig | None = None,
) -> str:
    """Compute the version the project's next release will carry.

    Args:
        project: Project directory to resolve.
        repo_root: Repository root, or None outside a git repository.
        config: Changelog file name; defaults apply when omitted.

    Returns:
        Bumped changelog version, else the latest tag's version, else
        the bootstrap version.
    """
    return _resolve(project, repo_root, config or ResolverConfig())[0]


def next_prerelease_version(
    project: ProjectDirectory,
    repo_root: Path | None,
    config: ResolverConfig | None = None,
) -> str:
    """Compute the prerelease version for the current commit.

    Halts the run (exit code 1) when the project has a non-bootstrap
    version but no tag to count commits from.
    """
    config = config or ResolverConfig()
    version, released = _resolve(project, repo_root, config)
    tag = most_recent_tag(repo_root, project.name)

    count: int | None = None
    if tag is not None:
        count = commits_since(repo_root, tag, project.relative_to(repo_root))
    elif version == BOOTSTRAP_VERSION:
        # First release ever: count everything since the repository began
        count = count_commits(repo_root) if repo_root is not None else None
    else:
        # Only a changelog release can lack a tag; name the tag it needs
        name, missing = project.name, released or version
        fatal(
            f"Could not calculate prerelease number for version {version} of "
            f"project {name} because no tag named {name}-v{missing} or "
            f"{name}-{missing} exists. Create tag named {name}-{missing} or "
            f"{name}-v{missing} on an appropriate commit and run again."
        )

    return format_prerelease(
        version, count, label=config.prerelease_label, width=config.prerelease_width
    )


def promote_changelog(
    source: Path,
    dest: Path | None = None,
    project: ProjectDirectory | None = None,
    repo_root: Path | None = None,
) -> str | None:
    """Promote the unreleased section of ``source`` and write it to ``dest``.

    Args:
        source: Changelog to read.
        dest: Where to write the result; defaults to ``source``. Writing
              elsewhere previews a release without touching the original.
        project: Project the changelog belongs to. When the changelog has
                 no released entry, the new entry gets the project's tagged
                 version, as next_release_version reports it.
        repo_root: Repository root used to look up that tag.

    Returns:
        The version stamped on the new entry, or None when nothing was
        bumped (no changelog, or a ``none``/``skip`` directive, in which
        case the file is copied to ``dest`` unchanged).
    """
    dest = dest or source
    changelog = _load(source)
    if changelog is None:
        return None

    kind = _instruction(changelog)
    if kind is BumpKind.NONE:
        if dest.resolve() != source.resolve():
            shutil.copyfile(source, dest)
        return None

    latest = _latest_version(changelog, source)
    if latest is not None:
        new_version = str(bump(latest, kind))
    elif project is not None:
        new_version = _untagged_version(project, repo_root)
    else:
        new_version = BOOTSTRAP_VERSION
    save_changelog(promote(changelog, new_version), dest)
    return new_version
