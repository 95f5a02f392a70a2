"""CLI entry point for monover."""

from __future__ import annotations

from pathlib import Path

import click

from monover.config import ResolverConfig, load_config
from monover.discovery import discover_projects
from monover.models import ProjectDirectory
from monover.resolver import (
    next_prerelease_version,
    next_release_version,
    promote_changelog,
)
from monover.shell import step
from monover.vcs import find_repo_root

root_argument = click.argument(
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
project_option = click.option(
    "-p",
    "--project",
    "names",
    multiple=True,
    help="Only resolve this project (directory name). Repeatable.",
)


def _load_projects(
    root: Path, names: tuple[str, ...] = ()
) -> tuple[Path | None, ResolverConfig, list[ProjectDirectory]]:
    """Find the repository, its configuration and the selected projects."""
    root = root.resolve()
    repo_root = find_repo_root(root)
    config = load_config(repo_root or root)
    projects = discover_projects(root, config)
    if names:
        unknown = set(names) - {p.name for p in projects}
        if unknown:
            raise click.ClickException(f"Unknown project(s): {', '.join(sorted(unknown))}")
        projects = [p for p in projects if p.name in names]
    if not projects:
        raise click.ClickException(
            f"No project directories (containing {config.manifest}) found under {root}"
        )
    return repo_root, config, projects


@click.group()
@click.version_option(package_name="monover")
def cli() -> None:
    """Resolve next versions for monorepo subprojects from changelogs and tags."""


@cli.command()
@root_argument
def projects(root: Path) -> None:
    """List the project directories that versions are resolved for."""
    step("Discovering project directories")
    repo_root, _, found = _load_projects(root)
    base = repo_root or root.resolve()
    for project in found:
        click.echo(f"  {project.name} ({project.relative_to(base)}) [{project.package_name}]")


@cli.command()
@root_argument
@project_option
def release(root: Path, names: tuple[str, ...]) -> None:
    """Print the next release version of each project."""
    repo_root, config, found = _load_projects(root, names)
    for project in found:
        click.echo(f"{project.name} {next_release_version(project, repo_root, config)}")


@cli.command()
@root_argument
@project_option
def alpha(root: Path, names: tuple[str, ...]) -> None:
    """Print the prerelease version of each project for the current commit."""
    repo_root, config, found = _load_projects(root, names)
    for project in found:
        click.echo(f"{project.name} {next_prerelease_version(project, repo_root, config)}")


@cli.command()
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the promoted changelog here instead of overwriting SOURCE.",
)
def promote(source: Path, output: Path | None) -> None:
    """Fold the unreleased section of a changelog into a new release entry."""
    if not source.is_file():
        click.echo(f"No changelog at {source}; nothing to promote.")
        return
    dest = output or source
    project = ProjectDirectory.from_path(source.parent)
    version = promote_changelog(source, dest, project, find_repo_root(project.path))
    if version is None:
        click.echo(f"Directive is none/skip; {dest} left unchanged.")
    else:
        click.echo(f"✓ Promoted unreleased changes to {version} in {dest}")
