"""
Path validation for the sandbox root.

Every caller-supplied path goes through :class:`PathValidator` before any
storage access. Validation is lexical first (``..`` and absolute paths) and
then physical (symlinks are followed and the real path re-checked).
"""

import logging
import os
from pathlib import Path, PurePosixPath

from sandbox_fs.filesystem.exceptions import (
    FileAccessDeniedError,
    InvalidPathError,
    ParentDirectoryMissingError,
)

logger = logging.getLogger(__name__)


def expand_home(path: str) -> str:
    """Expand a leading ``~`` or ``~/`` to the user's home directory."""
    if path == "~":
        return str(Path.home())
    if path.startswith("~/"):
        return str(Path.home() / path[2:])
    return path


def is_within_directory(path: Path, directory: Path) -> bool:
    """Check if path is ``directory`` itself or one of its descendants."""
    try:
        path.relative_to(directory)
        return True
    except ValueError:
        return False


class PathValidator:
    """
    Resolves caller paths against a sandbox root and rejects escapes.

    Usage:
        validator = PathValidator(Path("/tmp/workspace"))
        target = validator.validate("src/main.py")
        validator.validate("../etc/passwd")  # FileAccessDeniedError
    """

    def __init__(self, root: Path):
        self.root = root

    def validate(self, requested: str, allow_missing_parents: bool = False) -> Path:
        """
        Validate a caller-supplied path.

        Existing targets have their real path checked against the root.
        Targets that do not exist yet are checked through their parent
        directory, which must exist unless ``allow_missing_parents`` is set,
        in which case the nearest existing ancestor is checked instead.

        Args:
            requested: Path relative to the root (absolute paths inside the
                root are accepted as well)
            allow_missing_parents: Validate against the nearest existing
                ancestor instead of requiring the parent to exist

        Returns:
            Absolute, normalized path inside the root

        Raises:
            FileAccessDeniedError: If the path or its real location escapes
            ParentDirectoryMissingError: If the parent of a new target is missing
            InvalidPathError: If the path is malformed
        """
        if not isinstance(requested, str) or "\x00" in requested:
            raise InvalidPathError(repr(requested), "Path contains invalid characters")

        candidate = Path(expand_home(requested))
        if not candidate.is_absolute():
            candidate = self.root / candidate
        normalized = Path(os.path.normpath(candidate))

        if not is_within_directory(normalized, self.root):
            logger.warning(f"Access denied to {requested}: outside sandbox root")
            raise FileAccessDeniedError(
                requested, "Access denied - path outside allowed directory"
            )

        if os.path.lexists(normalized):
            self._check_real_path(
                normalized, requested, "symlink target outside allowed directory"
            )
            return normalized

        parent = normalized.parent
        if not parent.exists():
            if not allow_missing_parents:
                raise ParentDirectoryMissingError(self.to_relative(parent))
            parent = self._nearest_existing_ancestor(parent)

        self._check_real_path(parent, requested, "parent directory outside allowed directory")
        return normalized

    def to_relative(self, path: Path) -> str:
        """Render ``path`` relative to the root with forward slashes."""
        return PurePosixPath(path.relative_to(self.root)).as_posix()

    def is_inside(self, path: Path) -> bool:
        """Check whether the real location of ``path`` stays in the root."""
        try:
            real = Path(os.path.realpath(path))
        except (OSError, RuntimeError):
            return False
        return is_within_directory(real, self.root)

    def _check_real_path(self, path: Path, requested: str, reason: str) -> None:
        try:
            real = Path(os.path.realpath(path))
        except (OSError, RuntimeError) as e:
            logger.warning(f"Cannot resolve {path}: {e}")
            raise InvalidPathError(requested, "Cannot resolve path")

        if not is_within_directory(real, self.root):
            logger.warning(f"Access denied to {path}: {reason} ({real})")
            raise FileAccessDeniedError(requested, f"Access denied - {reason}")

    def _nearest_existing_ancestor(self, path: Path) -> Path:
        while not os.path.lexists(path) and path != self.root:
            path = path.parent
        return path
