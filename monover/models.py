"""Data models for monover.

These Pydantic models represent project directories and the parts of a
changelog the version resolver reads and rewrites.
"""

from __future__ import annotations

from pathlib import Path

import semver
from pydantic import BaseModel, ConfigDict, Field

from .versions import parse_version


class ProjectDirectory(BaseModel):
    """A directory holding exactly one package manifest.

    Attributes:
        path: Absolute path to the project directory.
        name: Final path segment. Used for tag patterns.
        package_name: Canonical [project].name from the manifest, or the
                      directory name when the manifest does not declare one.
        manifest: File name of the manifest that identified the project.
    """

    path: Path
    name: str
    package_name: str
    manifest: str = "pyproject.toml"

    @classmethod
    def from_path(cls, path: Path, manifest: str = "pyproject.toml") -> ProjectDirectory:
        path = path.resolve()
        return cls(path=path, name=path.name, package_name=path.name, manifest=manifest)

    def relative_to(self, root: Path) -> str:
        """Posix path of this project relative to ``root`` ("." for the root)."""
        return self.path.relative_to(root.resolve()).as_posix()


class Change(BaseModel):
    """One bullet under a ``### <kind>`` heading."""

    model_config = ConfigDict(frozen=True)

    kind: str
    text: str


class UnreleasedSection(BaseModel):
    """Notes for changes that have not been assigned a version yet."""

    model_config = ConfigDict(frozen=True)

    description: str | None = None
    changes: list[Change] = Field(default_factory=list)


class ChangelogEntry(BaseModel):
    """A released version's record.

    Attributes:
        version: Version exactly as written in the heading.
        date: Release date as written, if any.
        yanked: True when the heading is marked ``[YANKED]``.
        description: Free text before the first change heading.
        changes: Bullets grouped by kind, in file order.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    date: str | None = None
    yanked: bool = False
    description: str | None = None
    changes: list[Change] = Field(default_factory=list)

    @property
    def parsed_version(self) -> semver.Version:
        return parse_version(self.version)


class Changelog(BaseModel):
    """A parsed changelog. Entries are stored most-recent-first.

    ``links`` holds link reference definitions (``[1.0.0]: https://...``)
    verbatim, in file order.
    """

    model_config = ConfigDict(frozen=True)

    header: str = "Changelog"
    description: str | None = None
    unreleased: UnreleasedSection | None = None
    entries: list[ChangelogEntry] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)

    @property
    def latest_entry(self) -> ChangelogEntry | None:
        return self.entries[0] if self.entries else None
