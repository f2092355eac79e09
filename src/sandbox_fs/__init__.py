"""
Sandbox FS - sandboxed file operations for LLM agents.

This package exposes a fixed set of file operations (read, write, edit,
move, delete, list, search) confined to one root directory, together with
JSON-schema tool definitions for LLM function calling.
"""

__version__ = "0.1.0"

from sandbox_fs.filesystem import (
    SandboxConfig,
    SandboxedFileTool,
    FileSystemError,
    FileAccessDeniedError,
    EditOperation,
    OPERATION_NAMES,
)

from sandbox_fs.settings import SandboxSettings

__all__ = [
    # Version
    "__version__",
    # Filesystem
    "SandboxConfig",
    "SandboxedFileTool",
    "FileSystemError",
    "FileAccessDeniedError",
    "EditOperation",
    "OPERATION_NAMES",
    # Settings
    "SandboxSettings",
]
