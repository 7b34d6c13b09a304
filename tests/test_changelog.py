"""Tests for shipnote.releasenote.changelog module."""

from datetime import date

import pytest

from shipnote.errors import ChangelogError
from shipnote.releasenote.changelog import (
    CHANGELOG_DESCRIPTION,
    CHANGELOG_TITLE,
    ChangeType,
    format_date,
    group_commits,
    merge,
    merge_changelog_file,
    render,
)
from shipnote.releasenote.commits import Commit, parse_commit


TODAY = date(2024, 3, 7)
REPO_URL = "https://gitlab.example.com/group/project"


class TestChangeType:
    """Tests for the ChangeType enumeration."""

    @pytest.mark.parametrize("key,label", [
        ("feat", "New Features"),
        ("fix", "Bug Fixes"),
        ("chore", "Chores"),
        ("docs", "Documentation Changes"),
        ("style", "Code Style Changes"),
        ("refactor", "Refactors"),
        ("test", "Tests"),
        ("break", "Breaking Changes"),
        ("other", "Other Changes"),
    ])
    def test_labels(self, key, label):
        """Test the label of every known type."""
        assert ChangeType.from_key(key).label == label

    @pytest.mark.parametrize("key", ["perf", "build", "ci", "FEAT", "", None])
    def test_unknown_falls_back_to_other(self, key):
        """Test that unmapped keys go to the other bucket."""
        assert ChangeType.from_key(key) is ChangeType.OTHER


class TestGroupCommits:
    """Tests for group_commits function."""

    def test_types_sorted_by_raw_key(self, sample_commits):
        """Test that type groups are ordered by key, not by label."""
        groups = group_commits(sample_commits)
        assert [t for t, _ in groups] == [ChangeType.CHORE, ChangeType.FEAT, ChangeType.FIX]

    def test_categories_keep_first_seen_order(self, sample_commits):
        """Test that categories are not re-sorted."""
        groups = dict(group_commits(sample_commits))
        assert [c for c, _ in groups[ChangeType.FEAT]] == ["ui", "api"]

    def test_commits_keep_relative_order(self, sample_commits):
        """Test that commits sharing type and category stay in order."""
        groups = dict(group_commits(sample_commits))
        ui_commits = dict(groups[ChangeType.FEAT])["ui"]
        assert [c.subject for c in ui_commits] == ["add button", "add modal"]

    def test_unknown_types_share_other_group(self):
        """Test that several unknown types land in one group."""
        commits = [
            Commit(hash="1", type="perf", subject="faster"),
            Commit(hash="2", type="ci", subject="pipeline"),
        ]
        groups = group_commits(commits)
        assert len(groups) == 1
        assert groups[0][0] is ChangeType.OTHER
        assert [c.hash for c in groups[0][1][0][1]] == ["1", "2"]

    def test_missing_category_is_its_own_group(self):
        """Test that commits without category group under None."""
        commits = [
            Commit(hash="1", type="fix", subject="a"),
            Commit(hash="2", type="fix", category="core", subject="b"),
            Commit(hash="3", type="fix", subject="c"),
        ]
        categories = group_commits(commits)[0][1]
        assert [c for c, _ in categories] == [None, "core"]
        assert [c.hash for c in categories[0][1]] == ["1", "3"]

    def test_empty(self):
        """Test that no commits gives no groups."""
        assert group_commits([]) == []


class TestFormatDate:
    """Tests for format_date function."""

    def test_no_zero_padding(self):
        assert format_date(date(2024, 3, 7)) == "2024-3-7"

    def test_two_digit_parts(self):
        assert format_date(date(2023, 12, 25)) == "2023-12-25"


class TestRender:
    """Tests for render function."""

    def test_single_commit_category_inline(self):
        """Test that a lone commit is rendered on the category line."""
        commits = [Commit(hash="abcdef1234", type="fix", category="core", subject="handle null")]
        section = render("v1.0.1", commits, today=TODAY)
        assert "* **core:** handle null (abcdef12)" in section.split("\n")

    def test_multi_commit_category_nested(self):
        """Test that several commits get a label line and nested bullets."""
        commits = [
            Commit(hash="1111111111", type="feat", category="ui", subject="add button"),
            Commit(hash="2222222222", type="feat", category="ui", subject="add modal"),
        ]
        lines = render("v1.1.0", commits, today=TODAY).split("\n")
        index = lines.index("* **ui:**")
        assert lines[index + 1] == "  * add button (11111111)"
        assert lines[index + 2] == "  * add modal (22222222)"

    def test_full_layout_without_repo_url(self, sample_commits):
        """Test the exact markdown of a section."""
        section = render("v1.2.0", sample_commits, today=TODAY)
        assert section == "\n".join([
            "### v1.2.0 (2024-3-7)",
            "",
            "#### Chores",
            "",
            "* **:** bump deps (55555555)",
            "",
            "#### New Features",
            "",
            "* **ui:**",
            "  * add button (11111111)",
            "  * add modal (44444444)",
            "* **api:** add endpoint (33333333)",
            "",
            "#### Bug Fixes",
            "",
            "* **core:** handle null (22222222)",
            "",
            "",
        ])

    def test_links_with_repo_url(self):
        """Test that hashes link to the commit page when a URL is given."""
        commits = [Commit(hash="abcdef1234567890", type="fix", category="core", subject="handle null")]
        section = render("v1.0.1", commits, repo_url=REPO_URL, today=TODAY)
        assert (
            f"* **core:** handle null ([abcdef12]({REPO_URL}/commit/abcdef1234567890))"
            in section.split("\n")
        )

    def test_end_to_end_heading_order(self):
        """Test that headings follow type key order, not label order."""
        messages = ["feat(ui): add button\n", "fix: null check\n", "chore: bump\n"]
        commits = [parse_commit(f"{i}" * 10, m) for i, m in enumerate(messages, start=1)]
        section = render("v1.2.0", commits, today=TODAY)
        assert section.index("#### Bug Fixes") > section.index("#### Chores")
        assert section.index("#### Chores") < section.index("#### New Features")
        assert section.index("#### New Features") < section.index("#### Bug Fixes")

    def test_other_changes_position(self):
        """Test that the other bucket sorts by its own key."""
        commits = [
            Commit(hash="1" * 10, type="test", subject="cover parser"),
            Commit(hash="2" * 10, type="perf", subject="faster"),
            Commit(hash="3" * 10, type="break", subject="drop py2"),
        ]
        section = render("v2.0.0", commits, today=TODAY)
        headings = [line for line in section.split("\n") if line.startswith("#### ")]
        assert headings == ["#### Breaking Changes", "#### Other Changes", "#### Tests"]

    def test_no_commits(self):
        """Test that an empty release renders just the heading."""
        assert render("v1.0.0", [], today=TODAY) == "### v1.0.0 (2024-3-7)\n\n"

    def test_defaults_to_today(self):
        """Test that the current local date is used by default."""
        section = render("v1.0.0", [])
        assert section.startswith(f"### v1.0.0 ({format_date(date.today())})")

    def test_rendering_is_repeatable(self, sample_commits):
        """Test that the same input renders the same markdown."""
        first = render("v1.2.0", sample_commits, repo_url=REPO_URL, today=TODAY)
        second = render("v1.2.0", list(sample_commits), repo_url=REPO_URL, today=TODAY)
        assert first == second


class TestMerge:
    """Tests for merge function."""

    def test_replaces_preamble_and_keeps_history(self):
        """Test that old content from the third line on is kept in order."""
        old = "\n".join([
            CHANGELOG_TITLE,
            CHANGELOG_DESCRIPTION,
            "",
            "### v1.0.0 (2024-1-1)",
            "",
            "#### Bug Fixes",
        ])
        new = "### v1.1.0 (2024-3-7)\n\n"
        merged = merge(old, new).split("\n")

        assert merged[:3] == [CHANGELOG_TITLE, CHANGELOG_DESCRIPTION, ""]
        assert merged[3:6] == ["### v1.1.0 (2024-3-7)", "", ""]
        assert merged[6:] == old.split("\n")[2:]

    def test_strips_any_first_two_lines(self):
        """Test that the first two lines are dropped whatever they contain."""
        merged = merge("# Old title\nold text\nkept", "new")
        assert merged.split("\n")[-1] == "kept"
        assert "# Old title" not in merged
        assert "old text" not in merged

    @pytest.mark.parametrize("old", [None, "", "only one line"])
    def test_short_or_missing_history(self, old):
        """Test that short input is treated as no history."""
        merged = merge(old, "### v1.0.0 (2024-3-7)")
        assert merged == "\n".join([
            CHANGELOG_TITLE,
            CHANGELOG_DESCRIPTION,
            "",
            "### v1.0.0 (2024-3-7)",
        ])

    def test_two_line_document(self):
        """Test that a bare preamble leaves nothing behind."""
        merged = merge(f"{CHANGELOG_TITLE}\n{CHANGELOG_DESCRIPTION}", "new")
        assert merged == f"{CHANGELOG_TITLE}\n{CHANGELOG_DESCRIPTION}\n\nnew"

    def test_merging_into_merged_output(self):
        """Test two releases in a row keep newest first."""
        first = merge(None, render("v1.0.0", [], today=date(2024, 1, 1)))
        second = merge(first, render("v1.1.0", [], today=date(2024, 2, 1)))
        assert second.index("### v1.1.0") < second.index("### v1.0.0")
        assert second.count(CHANGELOG_TITLE) == 1


class TestMergeChangelogFile:
    """Tests for merge_changelog_file function."""

    def test_unwritable_path_raises(self, temp_dir):
        """Test that a directory in place of the changelog is reported."""
        with pytest.raises(ChangelogError) as exc_info:
            merge_changelog_file(str(temp_dir), "### v1.0.0 (2024-3-7)\n")
        assert "Cannot write changelog" in str(exc_info.value)

    def test_creates_missing_file(self, temp_dir):
        """Test that a missing changelog starts a new one."""
        path = temp_dir / "CHANGELOG.md"
        result = merge_changelog_file(str(path), "### v1.0.0 (2024-3-7)\n")
        assert path.read_text(encoding="utf-8") == result
        assert result.startswith(CHANGELOG_TITLE)

    def test_updates_existing_file(self, temp_dir):
        """Test that the existing history is kept below the new section."""
        path = temp_dir / "CHANGELOG.md"
        path.write_text(f"{CHANGELOG_TITLE}\n{CHANGELOG_DESCRIPTION}\n\n### v1.0.0 (2024-1-1)\n",
                        encoding="utf-8")

        merge_changelog_file(str(path), "### v1.1.0 (2024-3-7)\n")

        content = path.read_text(encoding="utf-8")
        assert content.index("### v1.1.0") < content.index("### v1.0.0")
