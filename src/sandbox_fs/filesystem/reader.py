"""
Sandboxed read-side operations: file contents, metadata, listings and trees.
"""

import asyncio
import json
import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path

from sandbox_fs.filesystem.config import SandboxConfig
from sandbox_fs.filesystem.exceptions import (
    ExpectedFileError,
    FileSizeLimitExceededError,
)
from sandbox_fs.filesystem.models import (
    DirectoryEntry,
    DirectoryTreeEntry,
    DirectoryTreeResult,
    GetFileInfoResult,
    ListDirectoryResult,
    ReadFileResult,
    ReadMultipleFilesResult,
    SkippedEntry,
)
from sandbox_fs.filesystem.paths import PathValidator
from sandbox_fs.filesystem.storage import read_text

logger = logging.getLogger(__name__)

MULTI_FILE_HEADER = (
    "Here's the contents of all files read - each file is wrapped in <file> tags, "
    "with the file path in <file_path> and the file contents in <file_contents>:\n\n"
)


def _timestamp(value: float) -> str:
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()


class SandboxedFileReader:
    """
    Read operations confined to the sandbox root.

    Usage:
        config = SandboxConfig(root_dir=Path("/tmp/workspace"))
        reader = SandboxedFileReader(config, PathValidator(config.root_dir))

        result = await reader.read_file("src/main.py")
        print(result.content)
    """

    def __init__(self, config: SandboxConfig, validator: PathValidator):
        """
        Initialize the file reader.

        Args:
            config: Sandbox configuration
            validator: Path validator bound to ``config.root_dir``
        """
        self.config = config
        self.validator = validator

    async def read_file(self, path: str) -> ReadFileResult:
        """
        Read a file inside the sandbox.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            FileNotFoundError: If the file doesn't exist
            ExpectedFileError: If the path is a directory
            FileSizeLimitExceededError: If the file is too large
            FileReadError: If the file can't be read or decoded
        """
        target = self.validator.validate(path)
        content = self._read(target)
        logger.debug(f"Read file: {target} ({len(content)} chars)")
        return ReadFileResult(content=content)

    async def read_multiple_files(self, paths: list[str]) -> ReadMultipleFilesResult:
        """
        Read several files concurrently.

        Failures are rendered inline for the affected file and don't stop
        the other reads.
        """

        async def read_one(requested: str) -> str:
            try:
                target = self.validator.validate(requested)
                content = self._read(target)
            except Exception as e:
                logger.warning(f"Skipping file {requested}: {e}")
                return f"{requested}: Error - {e}"
            return (
                f"<file>\n<file_path>{requested}</file_path>\n"
                f"<file_contents>{content}</file_contents>\n</file>"
            )

        sections = await asyncio.gather(*(read_one(p) for p in paths))
        return ReadMultipleFilesResult(content=MULTI_FILE_HEADER + "\n\n".join(sections))

    async def get_file_info(self, path: str) -> GetFileInfoResult:
        """
        Get metadata for a file or directory.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            FileNotFoundError: If the path doesn't exist
        """
        target = self.validator.validate(path)
        stats = target.stat()
        created = getattr(stats, "st_birthtime", None) or stats.st_ctime
        return GetFileInfoResult(
            size=stats.st_size,
            created=_timestamp(created),
            modified=_timestamp(stats.st_mtime),
            accessed=_timestamp(stats.st_atime),
            is_directory=stat.S_ISDIR(stats.st_mode),
            is_file=stat.S_ISREG(stats.st_mode),
            permissions=oct(stats.st_mode)[-3:],
            path=path,
        )

    async def list_directory(self, path: str = ".") -> ListDirectoryResult:
        """
        List the non-hidden entries of a directory.

        Names are relative to the sandbox root. Entries resolving outside the
        sandbox are left out. A missing or unreadable directory yields an
        empty listing.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
        """
        target = self.validator.validate(path)

        try:
            names = sorted(os.listdir(target))
        except OSError as e:
            logger.error(f"Error listing directory {path}: {e}")
            return ListDirectoryResult(entries=[])

        entries = []
        for name in names:
            if name.startswith("."):
                continue
            item = target / name
            if not self.validator.is_inside(item):
                logger.warning(f"Not listing {item}: resolves outside sandbox")
                continue
            entries.append(
                DirectoryEntry(
                    name=self.validator.to_relative(item),
                    type="directory" if item.is_dir() else "file",
                )
            )

        logger.debug(f"Listed {len(entries)} entries in {target}")
        return ListDirectoryResult(entries=entries)

    async def get_directory_tree(self, path: str = ".") -> DirectoryTreeResult:
        """
        Build a recursive tree of a directory as indented JSON.

        Hidden entries are left out. Symlinked directories are not descended
        into and entries whose real path leaves the sandbox are omitted; both
        are reported in ``skipped`` together with unreadable directories.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            FileNotFoundError: If the path doesn't exist
        """
        target = self.validator.validate(path)
        if not target.exists():
            raise FileNotFoundError(f"Directory not found: {path}")

        skipped: list[SkippedEntry] = []
        tree = await self._build_tree(
            target, target.name or target.anchor, descend=True, skipped=skipped
        )
        payload = tree.model_dump(exclude_none=True)
        return DirectoryTreeResult(
            tree=json.dumps(payload, indent=2),
            skipped=sorted(skipped, key=lambda s: s.path),
        )

    async def _build_tree(
        self, current: Path, name: str, descend: bool, skipped: list[SkippedEntry]
    ) -> DirectoryTreeEntry:
        if not current.is_dir():
            return DirectoryTreeEntry(name=name, type="file")

        entry = DirectoryTreeEntry(name=name, type="directory", children=[])
        if not descend:
            skipped.append(
                SkippedEntry(
                    path=self.validator.to_relative(current),
                    reason="Symlinked directory not followed",
                )
            )
            return entry

        try:
            names = sorted(os.listdir(current))
        except OSError as e:
            logger.warning(f"Cannot read directory {current}: {e}")
            skipped.append(
                SkippedEntry(
                    path=self.validator.to_relative(current),
                    reason=f"Cannot read directory: {e.strerror or e}",
                )
            )
            return entry

        children = []
        for child in names:
            if child.startswith("."):
                continue
            child_path = current / child
            if not self.validator.is_inside(child_path):
                logger.warning(f"Skipping {child_path}: resolves outside sandbox")
                skipped.append(
                    SkippedEntry(
                        path=self.validator.to_relative(child_path),
                        reason="Symlink target outside sandbox",
                    )
                )
                continue
            children.append(child_path)

        subtrees = await asyncio.gather(
            *(
                self._build_tree(c, c.name, descend=not c.is_symlink(), skipped=skipped)
                for c in children
            )
        )
        entry.children = list(subtrees)
        return entry

    def _read(self, target: Path) -> str:
        relative = self.validator.to_relative(target)
        if not target.exists():
            raise FileNotFoundError(f"File not found: {relative}")
        if target.is_dir():
            raise ExpectedFileError(relative)

        file_size = target.stat().st_size
        if file_size > self.config.max_file_size_bytes:
            logger.warning(
                f"File too large: {target} ({file_size} bytes > "
                f"{self.config.max_file_size_bytes} bytes)"
            )
            raise FileSizeLimitExceededError(
                relative, file_size, self.config.max_file_size_bytes
            )

        return read_text(target, encoding=self.config.encoding, label=relative)

