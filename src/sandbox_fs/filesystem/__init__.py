"""
Sandboxed filesystem interface for LLM access.

This module provides file operations confined to a single root directory:
path validation, reading, writing, line-based edits with diffs, and search.
"""

from sandbox_fs.filesystem.config import SandboxConfig
from sandbox_fs.filesystem.diff import DiffService
from sandbox_fs.filesystem.edits import EditApplier
from sandbox_fs.filesystem.exceptions import (
    EditNotFoundError,
    ExpectedDirectoryError,
    ExpectedFileError,
    FileAccessDeniedError,
    FileReadError,
    FileSizeLimitExceededError,
    FileSystemError,
    FileWriteError,
    InvalidPathError,
    ParentDirectoryMissingError,
    PathTypeError,
    SearchError,
)
from sandbox_fs.filesystem.models import (
    OPERATION_NAMES,
    DirectoryEntry,
    DirectoryTreeEntry,
    EditOperation,
    FileSearchResult,
    FileSystemRequest,
    OperationResult,
    SkippedEntry,
    parse_request,
)
from sandbox_fs.filesystem.paths import PathValidator
from sandbox_fs.filesystem.reader import SandboxedFileReader
from sandbox_fs.filesystem.writer import SandboxedFileWriter
from sandbox_fs.filesystem.search import SandboxedSearchTools
from sandbox_fs.filesystem.tools import SandboxedFileTool

__all__ = [
    # Config
    "SandboxConfig",
    # Exceptions
    "EditNotFoundError",
    "ExpectedDirectoryError",
    "ExpectedFileError",
    "FileAccessDeniedError",
    "FileReadError",
    "FileSizeLimitExceededError",
    "FileSystemError",
    "FileWriteError",
    "InvalidPathError",
    "ParentDirectoryMissingError",
    "PathTypeError",
    "SearchError",
    # Models
    "OPERATION_NAMES",
    "DirectoryEntry",
    "DirectoryTreeEntry",
    "EditOperation",
    "FileSearchResult",
    "FileSystemRequest",
    "OperationResult",
    "SkippedEntry",
    "parse_request",
    # Components
    "PathValidator",
    "DiffService",
    "EditApplier",
    "SandboxedFileReader",
    "SandboxedFileWriter",
    "SandboxedSearchTools",
    "SandboxedFileTool",
]
