"""Semver directives embedded in changelog notes.

A line of the form ``+semver: <kind>`` in the unreleased section selects
how the next release is bumped. Only the first such line counts.
"""

from __future__ import annotations

import re
from enum import Enum

from .shell import warn

SEMVER_RE = re.compile(r"\+semver:[ \t]?(\S+)")


class BumpKind(str, Enum):
    """How to derive the next release from the latest one."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


# Accepted directive tokens, including legacy synonyms.
_TOKENS: dict[str, BumpKind] = {
    "major": BumpKind.MAJOR,
    "breaking": BumpKind.MAJOR,
    "minor": BumpKind.MINOR,
    "feature": BumpKind.MINOR,
    "patch": BumpKind.PATCH,
    "fix": BumpKind.PATCH,
    "none": BumpKind.NONE,
    "skip": BumpKind.NONE,
}


def normalize_newlines(text: str) -> str:
    """Convert CRLF and lone CR line breaks to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def find_directive(text: str | None) -> str | None:
    """Return the lowercased token of the first directive line, if any."""
    if not text:
        return None
    for line in normalize_newlines(text).split("\n"):
        match = SEMVER_RE.fullmatch(line)
        if match:
            return match.group(1).lower()
    return None


def parse_directive(text: str | None) -> BumpKind:
    """Turn free-form notes into a bump instruction.

    Missing text or a missing directive means PATCH. An unrecognized token
    also means PATCH, with a warning, so a typo never blocks a build.

    Examples:
        parse_directive("+semver: Feature") → BumpKind.MINOR
        parse_directive("notes only") → BumpKind.PATCH
    """
    token = find_directive(text)
    if token is None:
        return BumpKind.PATCH
    kind = _TOKENS.get(token)
    if kind is None:
        warn(f'unrecognized semver directive "{token}", assuming "patch"')
        return BumpKind.PATCH
    return kind


def strip_directives(text: str) -> str:
    """Return ``text`` without any directive lines."""
    lines = normalize_newlines(text).split("\n")
    return "\n".join(line for line in lines if not SEMVER_RE.fullmatch(line))
