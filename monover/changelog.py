"""Reading, rewriting and promoting Keep a Changelog files.

Only the parts the version resolver needs are modelled: the header, the
free-text description, an optional unreleased section and the released
entries with their change bullets. Link reference definitions are kept
verbatim so rewriting a file does not lose them.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from .directives import normalize_newlines, strip_directives
from .models import Change, Changelog, ChangelogEntry, UnreleasedSection

_H1_RE = re.compile(r"^#\s+(?P<title>.*?)\s*$")
_H2_RE = re.compile(r"^##\s+(?P<title>.*?)\s*$")
_H3_RE = re.compile(r"^###\s+(?P<title>.*?)\s*$")
_UNRELEASED_RE = re.compile(r"^\[?unreleased\]?$", re.IGNORECASE)
_ENTRY_RE = re.compile(
    r"^\[?(?P<version>[^\]\s]+)\]?"
    r"(?:\s+-\s+(?P<date>.+?))?"
    r"(?P<yanked>\s+\[YANKED\])?$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[-*]\s+(?P<text>.*)$")
_LINK_RE = re.compile(r"^\[[^\]]+\]:\s+\S+")


def parse_changelog(text: str) -> Changelog:
    """Parse changelog markdown into a Changelog.

    Raises:
        ValueError: If a ``##`` heading is neither "Unreleased" nor a
                    version heading.
    """
    header: str | None = None
    preamble: list[str] = []
    links: list[str] = []
    sections: list[tuple[str, list[str]]] = []

    for line in normalize_newlines(text).split("\n"):
        if _LINK_RE.match(line):
            links.append(line.rstrip())
            continue
        h2 = _H2_RE.match(line)
        if h2:
            sections.append((h2.group("title"), []))
            continue
        if sections:
            sections[-1][1].append(line)
            continue
        h1 = _H1_RE.match(line)
        if h1 and header is None:
            header = h1.group("title")
            continue
        preamble.append(line)

    unreleased: UnreleasedSection | None = None
    entries: list[ChangelogEntry] = []
    for title, body in sections:
        description, changes = _parse_body(body)
        if _UNRELEASED_RE.match(title):
            unreleased = UnreleasedSection(description=description, changes=changes)
            continue
        m = _ENTRY_RE.match(title)
        if not m:
            raise ValueError(f"Unrecognized changelog heading: ## {title}")
        entries.append(
            ChangelogEntry(
                version=m.group("version"),
                date=m.group("date"),
                yanked=bool(m.group("yanked")),
                description=description,
                changes=changes,
            )
        )

    return Changelog(
        header=header or "Changelog",
        description=_join(preamble),
        unreleased=unreleased,
        entries=entries,
        links=links,
    )


def _parse_body(lines: list[str]) -> tuple[str | None, list[Change]]:
    """Split a ``##`` section body into its description and change bullets."""
    description: list[str] = []
    changes: list[Change] = []
    kind: str | None = None
    current: list[str] | None = None

    def flush() -> None:
        nonlocal current
        if kind is not None and current is not None:
            text = "\n".join(current).rstrip()
            if text:
                changes.append(Change(kind=kind, text=text))
        current = None

    for line in lines:
        h3 = _H3_RE.match(line)
        if h3:
            flush()
            kind = h3.group("title")
            continue
        if kind is None:
            description.append(line)
            continue
        bullet = _BULLET_RE.match(line)
        if bullet:
            flush()
            current = [bullet.group("text")]
        elif not line.strip():
            flush()
        elif current is not None:
            current.append(line[2:] if line.startswith("  ") else line.strip())
        else:
            current = [line.strip()]
    flush()

    return _join(description), changes


def _join(lines: list[str]) -> str | None:
    """Join lines, trimming surrounding blank lines. Empty text is None."""
    text = "\n".join(lines).strip("\n")
    return text if text.strip() else None


def dump_changelog(changelog: Changelog) -> str:
    """Render a Changelog back to markdown."""
    lines = [f"# {changelog.header}", ""]
    if changelog.description:
        lines += [changelog.description, ""]
    if changelog.unreleased is not None:
        lines += ["## [Unreleased]", ""]
        lines += _render_body(changelog.unreleased.description, changelog.unreleased.changes)
    for entry in changelog.entries:
        heading = f"## [{entry.version}]"
        if entry.date:
            heading += f" - {entry.date}"
        if entry.yanked:
            heading += " [YANKED]"
        lines += [heading, ""]
        lines += _render_body(entry.description, entry.changes)
    if changelog.links:
        lines += [*changelog.links, ""]
    return "\n".join(lines).rstrip("\n") + "\n"


def _render_body(description: str | None, changes: list[Change]) -> list[str]:
    lines: list[str] = []
    if description:
        lines += [description, ""]
    # Group by kind, keeping the order kinds first appear in
    kinds: dict[str, list[Change]] = {}
    for change in changes:
        kinds.setdefault(change.kind, []).append(change)
    for kind, group in kinds.items():
        lines += [f"### {kind}", ""]
        lines += ["- " + change.text.replace("\n", "\n  ") for change in group]
        lines.append("")
    return lines


def load_changelog(path: Path) -> Changelog:
    """Load and parse a changelog file.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    return parse_changelog(path.read_text(encoding="utf-8"))


def maybe_load_changelog(path: Path) -> Changelog | None:
    """Load a changelog, or return None when there is no such file."""
    if not path.is_file():
        return None
    return load_changelog(path)


def save_changelog(changelog: Changelog, path: Path) -> None:
    """Write a changelog to ``path``, which may differ from where it was read."""
    path.write_text(dump_changelog(changelog), encoding="utf-8")


def promote(changelog: Changelog, version: str, date: str | None = None) -> Changelog:
    """Fold the unreleased section into a new head entry stamped ``version``.

    Directive lines are stripped from the unreleased description. All
    prior entries are kept in order, and the result has no unreleased
    section.

    Args:
        changelog: Changelog to promote. Not modified.
        version: Version string for the new entry.
        date: Release date; defaults to today's UTC date (YYYY-MM-DD).
    """
    unreleased = changelog.unreleased or UnreleasedSection()
    description = unreleased.description
    if description is not None:
        description = _join(strip_directives(description).split("\n"))
    entry = ChangelogEntry(
        version=version,
        date=date or datetime.now(timezone.utc).strftime("%Y-%m-%d"),
        description=description,
        changes=list(unreleased.changes),
    )
    return changelog.model_copy(
        update={"unreleased": None, "entries": [entry, *changelog.entries]}
    )
