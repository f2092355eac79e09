"""
Tests for edit application.
"""

import tempfile
from pathlib import Path

import pytest

from sandbox_fs.filesystem import (
    DiffService,
    EditApplier,
    EditNotFoundError,
    EditOperation,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def applier():
    """Create an EditApplier instance."""
    return EditApplier(DiffService())


def edit(old: str, new: str) -> EditOperation:
    return EditOperation(old_text=old, new_text=new)


class TestEditOperation:
    """Test the EditOperation model."""

    def test_wire_names(self):
        """Test that oldText/newText are accepted."""
        op = EditOperation.model_validate({"oldText": "a", "newText": "b"})
        assert op.old_text == "a"
        assert op.new_text == "b"

    def test_extra_fields_rejected(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(ValueError):
            EditOperation.model_validate({"oldText": "a", "newText": "b", "x": 1})


class TestApply:
    """Test in-memory edit application."""

    def test_exact_match(self, applier):
        """Test an exact substring replacement."""
        assert applier.apply("foo baz\n", [edit("foo", "bar")]) == "bar baz\n"

    def test_only_first_occurrence(self, applier):
        """Test that only the first occurrence is replaced."""
        assert applier.apply("x x x", [edit("x", "y")]) == "y x x"

    def test_sequential_edits(self, applier):
        """Test that later edits see earlier results."""
        assert applier.apply("a\n", [edit("a", "b"), edit("b", "c")]) == "c\n"

    def test_fuzzy_match_keeps_indentation(self, applier):
        """Test whitespace-tolerant matching re-indents the replacement."""
        content = "def f():\n    x = 1\n    return x\n"
        result = applier.apply(
            content, [edit("  x = 1\n  return x", "  y = 2\n  return y")]
        )
        assert result == "def f():\n    y = 2\n    return y\n"

    def test_fuzzy_match_nested_indentation(self, applier):
        """Test that deeper relative indentation is preserved."""
        content = "class A:\n    def f(self):\n        pass\n"
        result = applier.apply(
            content,
            [edit("  def f(self):\n  pass", "  def f(self):\n      return 1")],
        )
        assert result == "class A:\n    def f(self):\n        return 1\n"

    def test_not_found(self, applier):
        """Test that a missing old text raises."""
        with pytest.raises(EditNotFoundError) as exc_info:
            applier.apply("foo\n", [edit("nope", "x")])
        assert "Could not find exact match for edit" in str(exc_info.value)
        assert exc_info.value.old_text == "nope"

    def test_empty_old_text(self, applier):
        """Test that an empty old text is rejected."""
        with pytest.raises(EditNotFoundError):
            applier.apply("foo\n", [edit("", "x")])

    def test_crlf_content(self, applier):
        """Test that CRLF content and edits are normalized."""
        result = applier.apply("foo\r\nbar\r\n", [edit("foo\r\nbar", "baz\nqux")])
        assert result == "baz\nqux\n"

    def test_no_edits(self, applier):
        """Test that an empty edit list leaves content unchanged."""
        assert applier.apply("a\nb\n", []) == "a\nb\n"


class TestApplyEdits:
    """Test file-level edit application."""

    def test_writes_and_returns_fenced_diff(self, temp_dir, applier):
        """Test that edits are written and a fenced diff is returned."""
        target = temp_dir / "f.txt"
        target.write_text("foo baz\n")

        diff = applier.apply_edits(target, [edit("foo", "bar")], label="f.txt")

        assert diff.startswith("```diff\n")
        assert "-foo baz\n" in diff
        assert "+bar baz\n" in diff
        assert "--- f.txt\toriginal" in diff
        assert target.read_text() == "bar baz\n"

    def test_dry_run(self, temp_dir, applier):
        """Test that a dry run leaves the file untouched."""
        target = temp_dir / "f.txt"
        target.write_text("foo baz\n")

        diff = applier.apply_edits(target, [edit("foo", "bar")], dry_run=True)

        assert "+bar baz" in diff
        assert target.read_text() == "foo baz\n"

    def test_failed_edit_leaves_file(self, temp_dir, applier):
        """Test that a failing edit sequence writes nothing."""
        target = temp_dir / "f.txt"
        target.write_text("foo\n")

        with pytest.raises(EditNotFoundError):
            applier.apply_edits(target, [edit("foo", "bar"), edit("missing", "x")])
        assert target.read_text() == "foo\n"
