"""Configuration for monover.

Settings live in the ``[tool.monover]`` table of the repository root's
pyproject.toml. Every key is optional.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .shell import fatal
from .toml import get_tool_table, load_pyproject


class ResolverConfig(BaseModel):
    """Settings for project discovery and version formatting.

    Attributes:
        changelog: Changelog file name inside each project directory.
        manifest: File name or glob (e.g. "*.csproj") marking a project directory.
        prerelease_label: Token placed before the commit count.
        prerelease_width: Minimum zero-padded width of the commit count.
        exclude: Glob patterns, relative to the root, of directories to skip.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    changelog: str = "CHANGELOG.md"
    manifest: str = "pyproject.toml"
    prerelease_label: str = Field(default="alpha", alias="prerelease-label", min_length=1)
    prerelease_width: int = Field(default=4, alias="prerelease-width", ge=1)
    exclude: list[str] = Field(default_factory=list)


def load_config(root: Path) -> ResolverConfig:
    """Read [tool.monover] from ``root``/pyproject.toml.

    A missing file or table yields the defaults. Invalid settings halt the
    run with an error naming the offending key.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return ResolverConfig()
    table = get_tool_table(load_pyproject(pyproject))
    try:
        return ResolverConfig.model_validate(table)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        fatal(f"Invalid [tool.monover] in {pyproject}: {problems}")
