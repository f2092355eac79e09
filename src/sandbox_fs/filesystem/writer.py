"""
Sandboxed write-side operations: create, write, edit, move and delete.
"""

import logging
import os
import shutil
from typing import Optional

from sandbox_fs.filesystem.config import SandboxConfig
from sandbox_fs.filesystem.diff import DiffService
from sandbox_fs.filesystem.edits import EditApplier
from sandbox_fs.filesystem.exceptions import (
    EditNotFoundError,
    ExpectedDirectoryError,
    FileReadError,
    FileSizeLimitExceededError,
    FileWriteError,
)
from sandbox_fs.filesystem.models import (
    CreateDirectoryResult,
    DeleteDirectoryResult,
    DeleteFileResult,
    EditFileResult,
    EditOperation,
    MoveFileResult,
    WriteFileResult,
)
from sandbox_fs.filesystem.paths import PathValidator, is_within_directory
from sandbox_fs.filesystem.storage import atomic_write_text, read_text

logger = logging.getLogger(__name__)

OVERWRITE_MESSAGE = (
    "File exists and allowOverwrite is false. Set allowOverwrite to true to proceed."
)


class SandboxedFileWriter:
    """
    Write operations confined to the sandbox root.

    Existing files are protected: unless overwriting is allowed per call or
    by configuration, ``write_file`` and ``edit_file`` return the current
    content with ``file_exists=True`` instead of touching the file.

    Usage:
        config = SandboxConfig(root_dir=Path("/tmp/workspace"))
        writer = SandboxedFileWriter(config, PathValidator(config.root_dir))

        result = await writer.write_file("notes.txt", "hello")
        if result.file_exists:
            result = await writer.write_file("notes.txt", "hello", allow_overwrite=True)
    """

    def __init__(
        self,
        config: SandboxConfig,
        validator: PathValidator,
        diff_service: Optional[DiffService] = None,
    ):
        """
        Initialize the file writer.

        Args:
            config: Sandbox configuration
            validator: Path validator bound to ``config.root_dir``
            diff_service: Diff renderer (default: one using the configured context)
        """
        self.config = config
        self.validator = validator
        self.diff_service = diff_service or DiffService(config.diff_context_lines)
        self.edit_applier = EditApplier(self.diff_service, encoding=config.encoding)

    async def create_directory(self, path: str) -> CreateDirectoryResult:
        """
        Create a directory and any missing parents.

        Succeeds if the directory already exists.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            ExpectedDirectoryError: If a file already occupies the path
            FileWriteError: If the directory can't be created
        """
        target = self.validator.validate(path, allow_missing_parents=True)

        if target.exists() and not target.is_dir():
            raise ExpectedDirectoryError(path)

        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory {target}: {e}")
            raise FileWriteError(path, e.strerror or str(e)) from e

        logger.info(f"Created directory: {target}")
        return CreateDirectoryResult(success=True)

    async def write_file(
        self, path: str, content: str, allow_overwrite: Optional[bool] = None
    ) -> WriteFileResult:
        """
        Create or overwrite a text file.

        Args:
            path: Target path; its parent directory must exist
            content: Full file content
            allow_overwrite: Per-call consent (default: configuration)

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            ParentDirectoryMissingError: If the parent directory is missing
            FileWriteError: If the content can't be written
        """
        target = self.validator.validate(path)

        if target.is_dir():
            return WriteFileResult(
                success=False, message=f"Path is a directory, not a file: {path}"
            )

        diff = None
        if target.exists():
            if not self._overwrite_allowed(allow_overwrite):
                logger.warning(f"File already exists at {path} and allowOverwrite is false")
                return WriteFileResult(
                    success=False,
                    file_exists=True,
                    existing_content=read_text(target, encoding=self.config.encoding, label=path),
                    message=OVERWRITE_MESSAGE,
                )
            try:
                existing = read_text(target, encoding=self.config.encoding, label=path)
            except FileReadError as e:
                logger.debug(f"No diff for {path}: {e.reason}")
            else:
                diff = self.diff_service.generate_diff(existing, content)

        size = atomic_write_text(
            target, content, encoding=self.config.encoding, label=path
        )
        logger.info(f"Wrote file: {target} ({size} bytes)")
        return WriteFileResult(
            success=True,
            content=content,
            message="File written successfully",
            diff=diff,
        )

    async def edit_file(
        self,
        path: str,
        edits: list[EditOperation],
        dry_run: bool = False,
        allow_overwrite: Optional[bool] = None,
    ) -> EditFileResult:
        """
        Apply line-based edits to an existing file.

        A dry run only previews the diff and needs no overwrite consent.
        Edits that can't be located produce ``success=False`` and leave the
        file untouched.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            ParentDirectoryMissingError: If the parent directory is missing
            FileSizeLimitExceededError: If the file is too large
        """
        target = self.validator.validate(path)

        if target.is_dir():
            return EditFileResult(
                success=False, message=f"Path is a directory, not a file: {path}"
            )
        if not target.exists():
            return EditFileResult(success=False, message=f"File not found: {path}")

        file_size = target.stat().st_size
        if file_size > self.config.max_file_size_bytes:
            raise FileSizeLimitExceededError(
                path, file_size, self.config.max_file_size_bytes
            )

        if not dry_run and not self._overwrite_allowed(allow_overwrite):
            logger.warning(f"File already exists at {path} and allowOverwrite is false")
            return EditFileResult(
                success=False,
                file_exists=True,
                existing_content=read_text(target, encoding=self.config.encoding, label=path),
                message=OVERWRITE_MESSAGE,
            )

        try:
            diff = self.edit_applier.apply_edits(
                target,
                edits,
                dry_run=dry_run,
                label=self.validator.to_relative(target),
            )
        except EditNotFoundError as e:
            logger.warning(f"Edit failed for {path}: {e}")
            return EditFileResult(success=False, message=f"Error editing file: {e}")

        message = "Dry run - no changes written" if dry_run else "File edited successfully"
        return EditFileResult(success=True, diff=diff, message=message)

    async def move_file(self, source: str, destination: str) -> MoveFileResult:
        """
        Move or rename a file or directory with an atomic rename.

        The move is refused when the destination already exists.

        Raises:
            FileAccessDeniedError: If either path escapes the sandbox
            ParentDirectoryMissingError: If the destination's parent is missing
            FileWriteError: If the rename fails
        """
        source_path = self.validator.validate(source)
        dest_path = self.validator.validate(destination)

        if not os.path.lexists(source_path):
            return MoveFileResult(success=False, message=f"Source does not exist: {source}")
        if os.path.lexists(dest_path):
            return MoveFileResult(
                success=False, message=f"Destination already exists: {destination}"
            )
        if is_within_directory(dest_path, source_path):
            return MoveFileResult(
                success=False,
                message=f"Cannot move {source} into itself: {destination}",
            )

        try:
            os.rename(source_path, dest_path)
        except OSError as e:
            logger.error(f"Failed to move {source_path} to {dest_path}: {e}")
            raise FileWriteError(destination, e.strerror or str(e)) from e

        logger.info(f"Moved {source_path} to {dest_path}")
        return MoveFileResult(
            success=True, message=f"Successfully moved {source} to {destination}"
        )

    async def delete_file(self, path: str) -> DeleteFileResult:
        """
        Delete a single file (or symlink).

        Missing paths and directories yield ``success=False``.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            FileWriteError: If the file can't be removed
        """
        target = self.validator.validate(path)

        if not os.path.lexists(target):
            logger.debug(f"Nothing to delete at {target}")
            return DeleteFileResult(success=False)
        if target.is_dir() and not target.is_symlink():
            logger.warning(f"Refusing to delete directory with delete_file: {target}")
            return DeleteFileResult(success=False)

        try:
            target.unlink()
        except OSError as e:
            logger.error(f"Failed to delete file {target}: {e}")
            raise FileWriteError(path, e.strerror or str(e)) from e

        logger.info(f"Deleted file: {target}")
        return DeleteFileResult(success=True)

    async def delete_directory(self, path: str) -> DeleteDirectoryResult:
        """
        Recursively delete a directory.

        Missing paths, files and the sandbox root itself yield ``success=False``.

        Raises:
            FileAccessDeniedError: If the path escapes the sandbox
            FileWriteError: If the tree can't be removed
        """
        target = self.validator.validate(path)

        if not target.exists() or not target.is_dir() or target.is_symlink():
            logger.debug(f"No directory to delete at {target}")
            return DeleteDirectoryResult(success=False)
        if target == self.validator.root:
            logger.warning("Refusing to delete the sandbox root")
            return DeleteDirectoryResult(success=False)

        try:
            shutil.rmtree(target)
        except OSError as e:
            logger.error(f"Failed to delete directory {target}: {e}")
            raise FileWriteError(path, e.strerror or str(e)) from e

        logger.info(f"Deleted directory: {target}")
        return DeleteDirectoryResult(success=True)

    def _overwrite_allowed(self, allow_overwrite: Optional[bool]) -> bool:
        if allow_overwrite is None:
            return self.config.allow_overwrite_by_default
        return allow_overwrite

