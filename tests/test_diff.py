"""
Tests for diff rendering.
"""

from sandbox_fs.filesystem.diff import (
    PATCH_SEPARATOR,
    DiffService,
    fence_diff,
    normalize_line_endings,
    split_lines,
)


def numbered(count: int, **replacements) -> str:
    """Build newline-terminated lines '1'..'count' with some lines replaced."""
    lines = [replacements.get(f"l{i}", str(i)) for i in range(1, count + 1)]
    return "\n".join(lines) + "\n"


class TestHelpers:
    """Test diff helper functions."""

    def test_normalize_line_endings(self):
        """Test CRLF to LF conversion."""
        assert normalize_line_endings("a\r\nb\r\n") == "a\nb\n"
        assert normalize_line_endings("a\nb") == "a\nb"

    def test_split_lines(self):
        """Test splitting with and without a trailing newline."""
        assert split_lines("") == []
        assert split_lines("a\nb\n") == ["a", "b"]
        assert split_lines("a\nb") == ["a", "b"]
        assert split_lines("a\n\n") == ["a", ""]

    def test_fence_diff(self):
        """Test markdown fencing."""
        assert fence_diff("-a\n+b\n") == "```diff\n-a\n+b\n```\n\n"

    def test_fence_diff_longer_than_content_backticks(self):
        """Test that the fence outgrows backtick runs inside the diff."""
        fenced = fence_diff("+```python\n")
        assert fenced.startswith("````diff\n")
        assert fenced.endswith("````\n\n")


class TestGenerateDiff:
    """Test the chunked diff."""

    def test_identical_inputs(self):
        """Test that identical inputs produce headers only."""
        service = DiffService()
        assert service.generate_diff("a\nb\n", "a\nb\n") == "--- old\n+++ new\n"
        assert service.generate_diff("", "") == "--- old\n+++ new\n"

    def test_single_change(self):
        """Test a change surrounded by short context."""
        diff = DiffService().generate_diff("a\nb\nc\n", "a\nX\nc\n")
        assert diff == "--- old\n+++ new\n@@ -1,3 +1,3 @@\n a\n-b\n+X\n c\n"

    def test_new_file(self):
        """Test a diff against empty content."""
        diff = DiffService().generate_diff("", "hello\n")
        assert diff == "--- old\n+++ new\n@@ -1,0 +1,1 @@\n+hello\n"

    def test_long_leading_context_is_elided(self):
        """Test that a long unchanged prefix keeps its edges and an ellipsis."""
        diff = DiffService().generate_diff(numbered(10), numbered(10, l10="ten"))
        assert diff == (
            "--- old\n+++ new\n"
            "@@ -1,10 +1,10 @@\n"
            " 1\n 2\n 3\n ...\n 7\n 8\n 9\n-10\n+ten\n"
        )

    def test_distant_changes_split_hunks(self):
        """Test that a long unchanged gap between changes splits the hunk."""
        diff = DiffService().generate_diff(
            numbered(20), numbered(20, l2="two", l19="nineteen")
        )
        assert diff.count("@@ -") == 2
        assert "@@ -1,5 +1,5 @@\n 1\n-2\n+two\n 3\n 4\n 5\n" in diff
        assert "@@ -16,5 +16,5 @@\n 16\n 17\n 18\n-19\n+nineteen\n 20\n" in diff
        assert " 10\n" not in diff

    def test_close_changes_share_hunk(self):
        """Test that changes separated by a short gap stay in one hunk."""
        diff = DiffService().generate_diff(numbered(8), numbered(8, l2="b", l6="f"))
        assert diff.count("@@ -") == 1
        assert " 3\n 4\n 5\n" in diff

    def test_crlf_is_normalized(self):
        """Test that line ending differences alone produce no hunks."""
        diff = DiffService().generate_diff("a\r\nb\r\n", "a\nb\n")
        assert diff == "--- old\n+++ new\n"

    def test_zero_context(self):
        """Test rendering without context lines."""
        diff = DiffService(context_lines=0).generate_diff("a\nb\nc\n", "a\nX\nc\n")
        assert diff == "--- old\n+++ new\n@@ -2,1 +2,1 @@\n-b\n+X\n"

    def test_stable_output(self):
        """Test that identical inputs always render identically."""
        service = DiffService()
        old, new = numbered(30), numbered(30, l5="five", l25="x")
        assert service.generate_diff(old, new) == service.generate_diff(old, new)


class TestCreateUnifiedDiff:
    """Test the two-file patch."""

    def test_labels_and_changes(self):
        """Test headers and changed lines."""
        diff = DiffService().create_unified_diff("foo baz\n", "bar baz\n", "f.txt")

        assert diff.startswith(PATCH_SEPARATOR + "\n")
        assert "--- f.txt\toriginal\n" in diff
        assert "+++ f.txt\tmodified\n" in diff
        assert "-foo baz\n" in diff
        assert "+bar baz\n" in diff
        assert diff.endswith("\n")

    def test_no_changes(self):
        """Test that unchanged content still carries the headers."""
        diff = DiffService().create_unified_diff("same\n", "same\n", "f.txt")
        assert diff == f"{PATCH_SEPARATOR}\n--- f.txt\toriginal\n+++ f.txt\tmodified\n"

    def test_context_lines(self):
        """Test that distant lines are left out of the patch."""
        diff = DiffService(context_lines=1).create_unified_diff(
            numbered(10), numbered(10, l5="five"), "n.txt"
        )
        assert " 4\n" in diff
        assert " 6\n" in diff
        assert " 2\n" not in diff
