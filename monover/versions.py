"""Version parsing and bumping utilities.

Handles conversion between version strings and semver objects, with
special handling for incomplete version strings (e.g., "1.0" → "1.0.0").
"""

from __future__ import annotations

import semver

from .directives import BumpKind

BOOTSTRAP_VERSION = "0.0.1"


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros and tolerates a
    leading "v":
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "v1.2.3-beta" → "1.2.3-beta"

    Raises:
        ValueError: If the string is not a semantic version.
    """
    text = version_str.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    core, sep, rest = _split_core(text)
    parts = core.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    return semver.Version.parse(".".join(parts) + sep + rest)


def _split_core(text: str) -> tuple[str, str, str]:
    """Split "1.2.3-pre+build" into ("1.2.3", "-", "pre+build")."""
    for i, ch in enumerate(text):
        if ch in "-+":
            return text[:i], ch, text[i + 1 :]
    return text, "", ""


def bump(version: semver.Version, kind: BumpKind) -> semver.Version:
    """Apply a bump instruction, returning a new version.

    Lower-significance components reset to zero and any prerelease or
    build metadata is dropped. ``BumpKind.NONE`` returns the input.

    Examples:
        bump(1.2.3, MAJOR) → 2.0.0
        bump(1.2.3, MINOR) → 1.3.0
        bump(1.2.3, PATCH) → 1.2.4
    """
    if kind is BumpKind.MAJOR:
        return version.bump_major()
    if kind is BumpKind.MINOR:
        return version.bump_minor()
    if kind is BumpKind.PATCH:
        return version.bump_patch()
    return version


def format_prerelease(
    version: str, count: int | None, label: str = "alpha", width: int = 4
) -> str:
    """Append a zero-padded commit count to a release version.

    ``width`` is a minimum: counts wider than it are never truncated.

    Examples:
        format_prerelease("1.2.0", 7) → "1.2.0-alpha0007"
        format_prerelease("1.2.0", 12345) → "1.2.0-alpha12345"
        format_prerelease("1.2.0", None) → "1.2.0"
    """
    if count is None:
        return version
    return f"{version}-{label}{str(count).zfill(width)}"
