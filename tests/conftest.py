"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from monover.models import ProjectDirectory

SAMPLE_CHANGELOG = """\
# Changelog

All notable changes to this project are documented here.

## [Unreleased]

some notes
+semver: minor

### Added

- Retry support for uploads

## [2.1.3] - 2024-03-01

### Fixed

- Crash on empty input
- Wrong exit code when
  the config is missing

## [2.1.2] - 2024-02-10 [YANKED]

Bad build.

## [2.0.0] - 2024-01-05

### Changed

- Dropped Python 3.8

[2.1.3]: https://example.com/compare/core-v2.1.2...core-v2.1.3
"""


@pytest.fixture
def sample_changelog_text() -> str:
    return SAMPLE_CHANGELOG


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., ProjectDirectory]:
    """Factory creating a project directory under tmp_path/packages."""

    def _make(name: str = "core", changelog: str | None = None) -> ProjectDirectory:
        d = tmp_path / "packages" / name
        d.mkdir(parents=True, exist_ok=True)
        (d / "pyproject.toml").write_text(f'[project]\nname = "{name}"\nversion = "0.0.0"\n')
        if changelog is not None:
            (d / "CHANGELOG.md").write_text(changelog)
        return ProjectDirectory.from_path(d)

    return _make
