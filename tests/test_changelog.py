"""Tests for monover.changelog."""

from __future__ import annotations

from pathlib import Path

import pytest

from monover.changelog import (
    dump_changelog,
    load_changelog,
    maybe_load_changelog,
    parse_changelog,
    promote,
    save_changelog,
)
from monover.models import Change, Changelog, ChangelogEntry, UnreleasedSection


class TestParseChangelog:
    def test_header_and_description(self, sample_changelog_text: str) -> None:
        ch = parse_changelog(sample_changelog_text)
        assert ch.header == "Changelog"
        assert ch.description == "All notable changes to this project are documented here."

    def test_entries_most_recent_first(self, sample_changelog_text: str) -> None:
        ch = parse_changelog(sample_changelog_text)
        assert [e.version for e in ch.entries] == ["2.1.3", "2.1.2", "2.0.0"]
        assert ch.latest_entry is not None
        assert ch.latest_entry.version == "2.1.3"

    def test_entry_fields(self, sample_changelog_text: str) -> None:
        latest, yanked, _ = parse_changelog(sample_changelog_text).entries
        assert latest.date == "2024-03-01"
        assert latest.changes == [
            Change(kind="Fixed", text="Crash on empty input"),
            Change(kind="Fixed", text="Wrong exit code when\nthe config is missing"),
        ]
        assert yanked.yanked is True
        assert yanked.date == "2024-02-10"
        assert yanked.description == "Bad build."

    def test_unreleased_section(self, sample_changelog_text: str) -> None:
        unreleased = parse_changelog(sample_changelog_text).unreleased
        assert unreleased == UnreleasedSection(
            description="some notes\n+semver: minor",
            changes=[Change(kind="Added", text="Retry support for uploads")],
        )

    def test_link_references_kept(self, sample_changelog_text: str) -> None:
        links = parse_changelog(sample_changelog_text).links
        assert links == ["[2.1.3]: https://example.com/compare/core-v2.1.2...core-v2.1.3"]

    def test_no_unreleased_section(self) -> None:
        ch = parse_changelog("# Changelog\n\n## 1.0.0\n\n- first\n")
        assert ch.unreleased is None
        assert ch.entries[0].version == "1.0.0"

    def test_unbracketed_unreleased(self) -> None:
        ch = parse_changelog("# Changelog\n\n## Unreleased\n\n+semver: major\n")
        assert ch.unreleased is not None
        assert ch.unreleased.description == "+semver: major"
        assert ch.entries == []

    def test_crlf_input(self) -> None:
        ch = parse_changelog("# Changelog\r\n\r\n## [1.0.0] - 2024-01-01\r\n")
        assert ch.entries[0].date == "2024-01-01"

    def test_empty_text(self) -> None:
        assert parse_changelog("") == Changelog()

    def test_unrecognized_heading_raises(self) -> None:
        with pytest.raises(ValueError, match="Unrecognized changelog heading"):
            parse_changelog("# Changelog\n\n## Release notes for the big one\n")


class TestLoad:
    def test_load_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_changelog(tmp_path / "CHANGELOG.md")

    def test_maybe_load_missing_is_none(self, tmp_path: Path) -> None:
        assert maybe_load_changelog(tmp_path / "CHANGELOG.md") is None

    def test_maybe_load_existing(self, tmp_path: Path, sample_changelog_text: str) -> None:
        path = tmp_path / "CHANGELOG.md"
        path.write_text(sample_changelog_text)
        ch = maybe_load_changelog(path)
        assert ch is not None
        assert len(ch.entries) == 3


class TestDump:
    def test_dump_then_parse_is_stable(self, sample_changelog_text: str) -> None:
        ch = parse_changelog(sample_changelog_text)
        assert parse_changelog(dump_changelog(ch)) == ch

    def test_renders_headings(self, sample_changelog_text: str) -> None:
        text = dump_changelog(parse_changelog(sample_changelog_text))
        assert "## [Unreleased]\n" in text
        assert "## [2.1.3] - 2024-03-01\n" in text
        assert "## [2.1.2] - 2024-02-10 [YANKED]\n" in text
        assert "- Wrong exit code when\n  the config is missing\n" in text
        assert text.endswith("core-v2.1.3\n")

    def test_absent_unreleased_not_written(self) -> None:
        ch = Changelog(entries=[ChangelogEntry(version="1.0.0")])
        assert "Unreleased" not in dump_changelog(ch)


class TestPromote:
    def test_new_head_entry(self, sample_changelog_text: str) -> None:
        ch = parse_changelog(sample_changelog_text)
        promoted = promote(ch, "2.2.0", date="2024-04-01")

        head = promoted.entries[0]
        assert head.version == "2.2.0"
        assert head.date == "2024-04-01"
        assert head.changes == [Change(kind="Added", text="Retry support for uploads")]
        assert [e.version for e in promoted.entries[1:]] == ["2.1.3", "2.1.2", "2.0.0"]

    def test_clears_unreleased_and_strips_directive(self, sample_changelog_text: str) -> None:
        promoted = promote(parse_changelog(sample_changelog_text), "2.2.0")
        assert promoted.unreleased is None
        assert promoted.entries[0].description == "some notes"

    def test_directive_only_description_becomes_none(self) -> None:
        ch = Changelog(unreleased=UnreleasedSection(description="+semver: major"))
        assert promote(ch, "1.0.0").entries[0].description is None

    def test_default_date_is_iso(self) -> None:
        date = promote(Changelog(), "0.0.1").entries[0].date
        assert date is not None
        assert len(date) == 10
        assert date[4] == date[7] == "-"

    def test_original_untouched(self, sample_changelog_text: str) -> None:
        ch = parse_changelog(sample_changelog_text)
        promote(ch, "3.0.0")
        assert ch.unreleased is not None
        assert len(ch.entries) == 3

    def test_round_trip_through_file(self, tmp_path: Path, sample_changelog_text: str) -> None:
        dest = tmp_path / "preview" / "CHANGELOG.md"
        dest.parent.mkdir()
        save_changelog(promote(parse_changelog(sample_changelog_text), "3.0.0"), dest)

        reloaded = load_changelog(dest)
        assert reloaded.latest_entry is not None
        assert reloaded.latest_entry.version == "3.0.0"
        assert reloaded.unreleased is None
