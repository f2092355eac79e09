"""
Best-effort search tools (grep, find) over the sandbox.

Walks never abort on a single bad entry. Every entry that could not be
inspected is reported as a :class:`SkippedEntry` next to the results.
"""

import logging
import os
import re
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from sandbox_fs.filesystem.config import SandboxConfig
from sandbox_fs.filesystem.exceptions import FileSystemError, SearchError
from sandbox_fs.filesystem.models import (
    FileSearchResult,
    FindFilesResult,
    SearchCodebaseResult,
    SkippedEntry,
)
from sandbox_fs.filesystem.paths import PathValidator
from sandbox_fs.filesystem.storage import read_text

logger = logging.getLogger(__name__)

WalkOutcome = Union[Path, SkippedEntry]

_LINE_BREAK = re.compile(r"\r?\n")


def glob_match(relative_path: str, pattern: str) -> bool:
    """
    Match a root-relative path against a glob pattern.

    ``*`` also matches across ``/``. A leading ``**/`` matches at any depth
    including the top level, and a trailing ``/**`` matches the directory
    itself as well as everything below it.
    """
    if fnmatchcase(relative_path, pattern):
        return True
    if pattern.startswith("**/") and glob_match(relative_path, pattern[3:]):
        return True
    if pattern.endswith("/**") and fnmatchcase(relative_path, pattern[:-3]):
        return True
    return False


class SandboxedSearchTools:
    """
    Search tools confined to the sandbox root.

    Usage:
        config = SandboxConfig(root_dir=Path("/tmp/workspace"))
        search = SandboxedSearchTools(config, PathValidator(config.root_dir))

        # Search for pattern in files
        result = await search.search_codebase("def main", recursive=True)

        # Find files by name
        result = await search.find_files("*.py", exclude=["node_modules/**"])
    """

    def __init__(self, config: SandboxConfig, validator: PathValidator):
        """
        Initialize search tools.

        Args:
            config: Sandbox configuration
            validator: Path validator bound to ``config.root_dir``
        """
        self.config = config
        self.validator = validator

    async def search_codebase(self, query: str, recursive: bool = False) -> SearchCodebaseResult:
        """
        Search file contents for a case-insensitive regular expression.

        Matching lines are trimmed and truncated to ``max_line_length``
        characters; at most ``max_search_results`` matches are returned.

        Args:
            query: Regular expression pattern
            recursive: Descend into subdirectories

        Returns:
            Matches plus the entries that were skipped

        Raises:
            SearchError: If the pattern is not a valid regular expression
        """
        try:
            regex = re.compile(query, re.IGNORECASE)
        except re.error as e:
            raise SearchError(f"Invalid regex pattern: {e}")

        limit = self.config.max_search_results
        results: list[FileSearchResult] = []
        skipped: list[SkippedEntry] = []

        for outcome in self._walk(self.validator.root, recursive):
            if isinstance(outcome, SkippedEntry):
                skipped.append(outcome)
                continue

            relative = self.validator.to_relative(outcome)
            try:
                content = self._read_searchable(outcome)
            except (OSError, FileSystemError) as e:
                logger.debug(f"Skipping {outcome}: {e}")
                skipped.append(SkippedEntry(path=relative, reason=str(e)))
                continue

            for line_number, line in enumerate(_LINE_BREAK.split(content), start=1):
                if not regex.search(line):
                    continue
                results.append(
                    FileSearchResult(
                        file=relative,
                        line_number=line_number,
                        line_content=self._truncate(line.strip()),
                    )
                )
                if len(results) >= limit:
                    logger.warning(f"Reached max results ({limit})")
                    return SearchCodebaseResult(results=results, skipped=skipped)

        logger.info(f"search_codebase found {len(results)} matches")
        return SearchCodebaseResult(results=results, skipped=skipped)

    async def find_files(
        self,
        pattern: str,
        recursive: bool = True,
        exclude: Optional[list[str]] = None,
    ) -> FindFilesResult:
        """
        Find files whose name matches a glob pattern.

        Args:
            pattern: Glob pattern matched against the file name (e.g. "*.py")
            recursive: Descend into subdirectories
            exclude: Glob patterns matched against root-relative paths;
                matching directories are not descended into

        Returns:
            Root-relative paths of matching files plus skipped entries
        """
        exclude = exclude or []

        def is_excluded(relative: str) -> bool:
            return any(glob_match(relative, p) for p in exclude)

        files: list[str] = []
        skipped: list[SkippedEntry] = []

        for outcome in self._walk(self.validator.root, recursive, is_excluded):
            if isinstance(outcome, SkippedEntry):
                skipped.append(outcome)
            elif fnmatchcase(outcome.name, pattern):
                files.append(self.validator.to_relative(outcome))

        logger.info(f"find_files found {len(files)} files")
        return FindFilesResult(files=files, skipped=skipped)

    def _walk(
        self,
        directory: Path,
        recursive: bool,
        exclude: Optional[Callable[[str], bool]] = None,
    ) -> Iterator[WalkOutcome]:
        """Yield regular files below ``directory`` in name order, or why an entry was skipped."""
        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            logger.warning(f"Cannot read directory {directory}: {e}")
            yield SkippedEntry(
                path=self.validator.to_relative(directory),
                reason=f"Cannot read directory: {e.strerror or e}",
            )
            return

        for name in names:
            item = directory / name
            relative = self.validator.to_relative(item)
            if exclude is not None and exclude(relative):
                continue

            if item.is_symlink():
                if not self.validator.is_inside(item):
                    logger.warning(f"Skipping {item}: symlink target outside sandbox")
                    yield SkippedEntry(path=relative, reason="Symlink target outside sandbox")
                    continue
                if item.is_dir():
                    yield SkippedEntry(path=relative, reason="Symlinked directory not followed")
                    continue

            if item.is_dir():
                if recursive:
                    yield from self._walk(item, recursive, exclude)
            elif item.is_file():
                yield item
            else:
                yield SkippedEntry(path=relative, reason="Not a regular file")

    def _read_searchable(self, path: Path) -> str:
        size = path.stat().st_size
        if size > self.config.max_file_size_bytes:
            raise SearchError(f"File too large to search ({size} bytes)")
        return read_text(
            path, encoding=self.config.encoding, label=self.validator.to_relative(path)
        )

    def _truncate(self, line: str) -> str:
        limit = self.config.max_line_length
        if len(line) > limit:
            return line[: limit - 3] + "..."
        return line
