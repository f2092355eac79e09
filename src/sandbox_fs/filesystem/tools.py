"""
Sandboxed filesystem tool façade.

Provides one entry point for LLM function calling: typed async methods for
Python callers, plus ``execute(name, arguments)`` which parses flat tool-call
arguments, dispatches, and always answers with a result payload.
"""

import functools
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import ValidationError

from sandbox_fs.filesystem.config import SandboxConfig
from sandbox_fs.filesystem.definitions import get_file_system_tools
from sandbox_fs.filesystem.diff import DiffService
from sandbox_fs.filesystem.exceptions import FileAccessDeniedError, FileSystemError
from sandbox_fs.filesystem.models import (
    OPERATION_NAMES,
    RESULT_TYPES,
    CreateDirectoryRequest,
    CreateDirectoryResult,
    DeleteDirectoryRequest,
    DeleteDirectoryResult,
    DeleteFileRequest,
    DeleteFileResult,
    DirectoryTreeRequest,
    DirectoryTreeResult,
    EditFileRequest,
    EditFileResult,
    EditOperation,
    FindFilesRequest,
    FindFilesResult,
    GetFileInfoRequest,
    GetFileInfoResult,
    ListDirectoryRequest,
    ListDirectoryResult,
    MoveFileRequest,
    MoveFileResult,
    OperationRequest,
    OperationResult,
    ReadFileRequest,
    ReadFileResult,
    ReadMultipleFilesRequest,
    ReadMultipleFilesResult,
    SearchCodebaseRequest,
    SearchCodebaseResult,
    WriteFileRequest,
    WriteFileResult,
    parse_request,
)
from sandbox_fs.filesystem.paths import PathValidator
from sandbox_fs.filesystem.reader import SandboxedFileReader
from sandbox_fs.filesystem.search import SandboxedSearchTools
from sandbox_fs.filesystem.writer import SandboxedFileWriter

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Optional[dict[str, Any]]], Awaitable[OperationResult]]


class SandboxedFileTool:
    """
    Unified sandboxed filesystem interface for LLM function calling.

    Every path is interpreted relative to ``config.root_dir`` and validated
    before any storage access.

    Usage:
        config = SandboxConfig(root_dir=Path("/tmp/workspace"))
        tool = SandboxedFileTool(config)

        # Get tool schemas for LLM
        definitions = tool.get_tool_definitions()

        # Execute tool call
        result = await tool.execute("read_file", {"path": "src/main.py"})
    """

    def __init__(self, config: SandboxConfig):
        """
        Initialize the sandboxed filesystem tool.

        Args:
            config: Sandbox configuration
        """
        self._configure(config)
        logger.debug(
            f"SandboxedFileTool initialized. Root: {self.config.root_dir}, "
            f"allow overwrite: {self.config.allow_overwrite_by_default}"
        )

    def _configure(self, config: SandboxConfig) -> None:
        self.config = config
        self.validator = PathValidator(config.root_dir)
        self.diff_service = DiffService(config.diff_context_lines)
        self.reader = SandboxedFileReader(config, self.validator)
        self.writer = SandboxedFileWriter(config, self.validator, self.diff_service)
        self.search = SandboxedSearchTools(config, self.validator)

    @property
    def root_dir(self) -> Path:
        return self.config.root_dir

    def set_root_dir(self, root_dir: Union[str, Path]) -> None:
        """Point the tool at a new sandbox root."""
        self._configure(self.config.replace(root_dir=root_dir))
        logger.info(f"Sandbox root set to {self.config.root_dir}")

    def set_allow_overwrite(self, allow_overwrite: bool) -> None:
        """Change the default overwrite policy."""
        self._configure(self.config.replace(allow_overwrite_by_default=allow_overwrite))
        logger.info(f"Default overwrite policy set to {allow_overwrite}")

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_tools(self) -> list[dict[str, Any]]:
        """Get provider-neutral tool descriptions."""
        return get_file_system_tools(self.config.max_search_results)

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """
        Get OpenAI function calling schemas for all operations.

        Returns:
            List of tool schemas in OpenAI format
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": tool["name"],
                    "description": tool.get("description", ""),
                    "parameters": tool["parameters"],
                },
            }
            for tool in self.get_tools()
        ]

    def get_command_map(self) -> dict[str, CommandHandler]:
        """
        Get operation name -> async handler taking flat arguments.

        Handlers raise on failure; use :meth:`execute` for normalized results.
        """
        return {name: functools.partial(self.run, name) for name in OPERATION_NAMES}

    def get_summary(self) -> dict[str, Any]:
        """
        Get a summary of the sandbox configuration.

        Returns:
            Dict with configuration summary
        """
        return {
            "root_dir": str(self.config.root_dir),
            "allow_overwrite_by_default": self.config.allow_overwrite_by_default,
            "max_file_size_mb": self.config.max_file_size_bytes / (1024 * 1024),
            "max_search_results": self.config.max_search_results,
            "operations": list(OPERATION_NAMES),
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def execute(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Execute a tool call from an LLM.

        Failures never escape: they come back in the operation's result
        shape with ``error`` and ``error_type`` set.

        Args:
            name: Operation name
            arguments: Flat tool-call arguments

        Returns:
            Result payload (wire field names, unset fields omitted)

        Raises:
            ValueError: If the operation name is unknown
        """
        result_type = RESULT_TYPES.get(name)
        if result_type is None:
            logger.error(f"Unknown operation '{name}'")
            raise ValueError(f"Unknown operation: {name}")

        logger.debug(f"Executing {name} with {arguments}")
        try:
            result = await self.run(name, arguments)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            result = result_type.from_exception(e)
        except FileAccessDeniedError as e:
            logger.warning(f"{name} denied: {e}")
            result = result_type.from_exception(e)
        except (FileSystemError, OSError) as e:
            logger.warning(f"{name} failed: {e}")
            result = result_type.from_exception(e)
        except Exception as e:
            logger.error(f"{name} unexpected error: {e}")
            result = result_type.from_exception(e, unexpected=True)

        return result.to_payload()

    async def run(
        self, name: str, arguments: Optional[dict[str, Any]] = None
    ) -> OperationResult:
        """
        Parse flat arguments for ``name`` and dispatch them.

        Raises:
            pydantic.ValidationError: If the arguments don't fit the operation
            FileSystemError: If the operation fails
        """
        return await self.dispatch(parse_request(name, arguments))

    async def dispatch(self, request: OperationRequest) -> OperationResult:
        """Route a typed request to its handler."""
        if isinstance(request, CreateDirectoryRequest):
            return await self.create_directory(request.path)
        elif isinstance(request, WriteFileRequest):
            return await self.write_file(
                request.path, request.content, allow_overwrite=request.allow_overwrite
            )
        elif isinstance(request, EditFileRequest):
            return await self.edit_file(
                request.path,
                request.edits,
                dry_run=request.dry_run,
                allow_overwrite=request.allow_overwrite,
            )
        elif isinstance(request, MoveFileRequest):
            return await self.move_file(request.source, request.destination)
        elif isinstance(request, ReadFileRequest):
            return await self.read_file(request.path)
        elif isinstance(request, ReadMultipleFilesRequest):
            return await self.read_multiple_files(request.paths)
        elif isinstance(request, DeleteFileRequest):
            return await self.delete_file(request.path)
        elif isinstance(request, DeleteDirectoryRequest):
            return await self.delete_directory(request.path)
        elif isinstance(request, ListDirectoryRequest):
            return await self.list_directory(request.path)
        elif isinstance(request, DirectoryTreeRequest):
            return await self.get_directory_tree(request.path)
        elif isinstance(request, GetFileInfoRequest):
            return await self.get_file_info(request.path)
        elif isinstance(request, SearchCodebaseRequest):
            return await self.search_codebase(request.query, recursive=request.recursive)
        elif isinstance(request, FindFilesRequest):
            return await self.find_files(
                request.pattern, recursive=request.recursive, exclude=request.exclude
            )
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_directory(self, path: str) -> CreateDirectoryResult:
        return await self.writer.create_directory(path)

    async def write_file(
        self, path: str, content: str, allow_overwrite: Optional[bool] = None
    ) -> WriteFileResult:
        return await self.writer.write_file(path, content, allow_overwrite=allow_overwrite)

    async def edit_file(
        self,
        path: str,
        edits: list[Union[EditOperation, dict[str, str]]],
        dry_run: bool = False,
        allow_overwrite: Optional[bool] = None,
    ) -> EditFileResult:
        operations = [
            e if isinstance(e, EditOperation) else EditOperation.model_validate(e)
            for e in edits
        ]
        return await self.writer.edit_file(
            path, operations, dry_run=dry_run, allow_overwrite=allow_overwrite
        )

    async def move_file(self, source: str, destination: str) -> MoveFileResult:
        return await self.writer.move_file(source, destination)

    async def read_file(self, path: str) -> ReadFileResult:
        return await self.reader.read_file(path)

    async def read_multiple_files(self, paths: list[str]) -> ReadMultipleFilesResult:
        return await self.reader.read_multiple_files(paths)

    async def delete_file(self, path: str) -> DeleteFileResult:
        return await self.writer.delete_file(path)

    async def delete_directory(self, path: str) -> DeleteDirectoryResult:
        return await self.writer.delete_directory(path)

    async def list_directory(self, path: str = ".") -> ListDirectoryResult:
        return await self.reader.list_directory(path)

    async def get_directory_tree(self, path: str = ".") -> DirectoryTreeResult:
        return await self.reader.get_directory_tree(path)

    async def get_file_info(self, path: str) -> GetFileInfoResult:
        return await self.reader.get_file_info(path)

    async def search_codebase(self, query: str, recursive: bool = False) -> SearchCodebaseResult:
        return await self.search.search_codebase(query, recursive=recursive)

    async def find_files(
        self,
        pattern: str,
        recursive: bool = True,
        exclude: Optional[list[str]] = None,
    ) -> FindFilesResult:
        return await self.search.find_files(pattern, recursive=recursive, exclude=exclude)
