"""
Text edit application with whitespace-tolerant matching.

LLM-generated edits often reproduce the target text with slightly wrong
indentation. Each edit is therefore tried as an exact substring first and,
failing that, as a window of lines compared after trimming surrounding
whitespace. The returned diff shows what actually changed.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from sandbox_fs.filesystem.diff import DiffService, fence_diff
from sandbox_fs.filesystem.exceptions import EditNotFoundError
from sandbox_fs.filesystem.models import EditOperation
from sandbox_fs.filesystem.storage import atomic_write_text, read_text

logger = logging.getLogger(__name__)

_LEADING_WHITESPACE = re.compile(r"^\s*")


def _indent(line: str) -> str:
    return _LEADING_WHITESPACE.match(line).group(0)


class EditApplier:
    """
    Applies ordered (old text, new text) replacements to file content.

    Usage:
        applier = EditApplier(DiffService())
        diff = applier.apply_edits(
            Path("/tmp/workspace/main.py"),
            [EditOperation(old_text="foo", new_text="bar")],
            dry_run=True,
        )
    """

    def __init__(self, diff_service: DiffService, encoding: str = "utf-8"):
        self.diff_service = diff_service
        self.encoding = encoding

    def apply_edits(
        self,
        path: Path,
        edits: Iterable[EditOperation],
        dry_run: bool = False,
        label: Optional[str] = None,
    ) -> str:
        """
        Apply edits to a file and return a fenced unified diff.

        Args:
            path: Validated path of the file to edit
            edits: Replacements, applied in order to the accumulated content
            dry_run: Compute the diff without writing the file
            label: File name shown in the diff headers (default: ``path``)

        Returns:
            Markdown-fenced unified diff of original vs. edited content

        Raises:
            EditNotFoundError: If any edit's old text can't be located
        """
        original = self.diff_service.normalize_line_endings(
            read_text(path, encoding=self.encoding, label=label)
        )
        modified = self.apply(original, edits)

        diff = self.diff_service.create_unified_diff(
            original, modified, label or str(path)
        )

        if not dry_run:
            atomic_write_text(path, modified, encoding=self.encoding, label=label)
            logger.info(f"Applied edits to {path}")
        else:
            logger.debug(f"Dry run, not writing edits to {path}")

        return fence_diff(diff)

    def apply(self, content: str, edits: Iterable[EditOperation]) -> str:
        """
        Apply edits to in-memory content.

        Raises:
            EditNotFoundError: If any edit's old text can't be located
        """
        modified = self.diff_service.normalize_line_endings(content)
        for edit in edits:
            old_text = self.diff_service.normalize_line_endings(edit.old_text)
            new_text = self.diff_service.normalize_line_endings(edit.new_text)

            if not old_text:
                raise EditNotFoundError(edit.old_text)

            if old_text in modified:
                modified = modified.replace(old_text, new_text, 1)
                continue

            fuzzy = self._apply_fuzzy(modified, old_text, new_text)
            if fuzzy is None:
                logger.debug(f"No match for edit: {edit.old_text!r}")
                raise EditNotFoundError(edit.old_text)
            modified = fuzzy

        return modified

    def _apply_fuzzy(self, content: str, old_text: str, new_text: str) -> Optional[str]:
        """Replace the first line window matching ``old_text`` modulo whitespace."""
        old_lines = old_text.split("\n")
        content_lines = content.split("\n")
        stripped_old = [line.strip() for line in old_lines]

        for i in range(len(content_lines) - len(old_lines) + 1):
            window = content_lines[i : i + len(old_lines)]
            if any(line.strip() != old for line, old in zip(window, stripped_old)):
                continue

            original_indent = _indent(content_lines[i])
            new_lines = []
            for j, line in enumerate(new_text.split("\n")):
                if j == 0:
                    new_lines.append(original_indent + line.lstrip())
                    continue
                old_indent = _indent(old_lines[j]) if j < len(old_lines) else ""
                new_indent = _indent(line)
                if old_indent and new_indent:
                    relative = max(0, len(new_indent) - len(old_indent))
                    new_lines.append(original_indent + " " * relative + line.lstrip())
                else:
                    new_lines.append(line)

            content_lines[i : i + len(old_lines)] = new_lines
            logger.debug(f"Fuzzy match for edit at line {i + 1}")
            return "\n".join(content_lines)

        return None
