"""
Line-level diff rendering for human and LLM review.

Two renderings are produced from :mod:`difflib` opcodes:

* ``create_unified_diff`` - a two-file patch with file labels, used for
  edit results.
* ``generate_diff`` - a GitHub-style chunked view where long unchanged runs
  are elided, used when a file is overwritten.

Both are presentation formats; they are stable for identical inputs but are
not meant to be applied as patches.
"""

import difflib
from dataclasses import dataclass, field

PATCH_SEPARATOR = "=" * 67
ELLIPSIS = "..."


def normalize_line_endings(text: str) -> str:
    """Convert CRLF line endings to LF."""
    return text.replace("\r\n", "\n")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping the empty tail after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def fence_diff(diff: str) -> str:
    """Wrap a diff in a markdown ``diff`` fence longer than any backtick run inside it."""
    num_backticks = 3
    while "`" * num_backticks in diff:
        num_backticks += 1
    fence = "`" * num_backticks
    return f"{fence}diff\n{diff}{fence}\n\n"


@dataclass
class _Hunk:
    old_start: int
    new_start: int
    old_lines: int = 0
    new_lines: int = 0
    body: list[str] = field(default_factory=list)

    def context(self, lines: list[str]) -> None:
        for line in lines:
            self.body.append(f" {line}")
        self.old_lines += len(lines)
        self.new_lines += len(lines)

    def elide(self, hidden: int) -> None:
        # The marker stands in for ``hidden`` unchanged lines.
        self.body.append(f" {ELLIPSIS}")
        self.old_lines += hidden
        self.new_lines += hidden

    def removed(self, lines: list[str]) -> None:
        for line in lines:
            self.body.append(f"-{line}")
        self.old_lines += len(lines)

    def added(self, lines: list[str]) -> None:
        for line in lines:
            self.body.append(f"+{line}")
        self.new_lines += len(lines)

    def render(self) -> str:
        header = f"@@ -{self.old_start},{self.old_lines} +{self.new_start},{self.new_lines} @@\n"
        return header + "".join(f"{line}\n" for line in self.body)


class DiffService:
    """
    Computes and renders line diffs.

    Usage:
        diffs = DiffService(context_lines=3)
        print(diffs.generate_diff("a\\nb\\n", "a\\nc\\n"))
        print(diffs.create_unified_diff(old, new, "src/main.py"))
    """

    def __init__(self, context_lines: int = 3):
        self.context_lines = context_lines

    def normalize_line_endings(self, text: str) -> str:
        return normalize_line_endings(text)

    def generate_diff(self, old_content: str, new_content: str) -> str:
        """
        Render a GitHub-style chunked diff between two texts.

        Changes are grouped into hunks with up to ``context_lines`` unchanged
        lines around them. An unchanged run between two changes that is longer
        than twice the context closes the hunk and opens a new one; a long
        unchanged run before the first change keeps its first and last
        context lines with an ellipsis marker in between.

        Args:
            old_content: Original content (empty string for new files)
            new_content: New content

        Returns:
            Diff text starting with ``--- old`` / ``+++ new`` headers
        """
        old_lines = split_lines(normalize_line_endings(old_content))
        new_lines = split_lines(normalize_line_endings(new_content))
        matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
        opcodes = matcher.get_opcodes()

        ctx = self.context_lines
        last = len(opcodes) - 1
        hunks: list[_Hunk] = []
        hunk = None

        for index, (tag, i1, i2, j1, j2) in enumerate(opcodes):
            if tag != "equal":
                if hunk is None:
                    hunk = _Hunk(i1 + 1, j1 + 1)
                if tag in ("replace", "delete"):
                    hunk.removed(old_lines[i1:i2])
                if tag in ("replace", "insert"):
                    hunk.added(new_lines[j1:j2])
                continue

            run = old_lines[i1:i2]
            if hunk is None:
                if index == last:
                    # Nothing changed.
                    break
                if ctx and len(run) > 2 * ctx:
                    hunk = _Hunk(i1 + 1, j1 + 1)
                    hunk.context(run[:ctx])
                    hunk.elide(len(run) - 2 * ctx)
                    hunk.context(run[-ctx:])
                elif ctx:
                    hunk = _Hunk(i1 + 1, j1 + 1)
                    hunk.context(run)
                else:
                    hunk = _Hunk(i2 + 1, j2 + 1)
            elif index == last:
                hunk.context(run[:ctx])
                hunks.append(hunk)
                hunk = None
            elif len(run) <= 2 * ctx:
                hunk.context(run)
            else:
                hunk.context(run[:ctx])
                hunks.append(hunk)
                hunk = _Hunk(i2 - ctx + 1, j2 - ctx + 1)
                hunk.context(run[len(run) - ctx:])

        if hunk is not None:
            hunks.append(hunk)

        return "--- old\n+++ new\n" + "".join(h.render() for h in hunks)

    def create_unified_diff(
        self, original_content: str, new_content: str, label: str = "file"
    ) -> str:
        """
        Render a two-file unified patch labelled with ``label``.

        Args:
            original_content: Content before the change
            new_content: Content after the change
            label: File name shown in the ``---``/``+++`` headers

        Returns:
            Patch text, newline terminated
        """
        lines = list(
            difflib.unified_diff(
                split_lines(normalize_line_endings(original_content)),
                split_lines(normalize_line_endings(new_content)),
                fromfile=label,
                tofile=label,
                fromfiledate="original",
                tofiledate="modified",
                n=self.context_lines,
                lineterm="",
            )
        )
        if not lines:
            lines = [f"--- {label}\toriginal", f"+++ {label}\tmodified"]
        return PATCH_SEPARATOR + "\n" + "\n".join(lines) + "\n"
