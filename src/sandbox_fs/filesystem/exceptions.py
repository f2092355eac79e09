"""
Exceptions for sandboxed filesystem operations.
"""


class FileSystemError(Exception):
    """Base exception for filesystem operations."""

    pass


class FileAccessDeniedError(FileSystemError):
    """Raised when a path resolves outside the sandbox root."""

    def __init__(self, path: str, reason: str = "Access denied"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class ParentDirectoryMissingError(FileSystemError):
    """Raised when the parent of a not-yet-existing target does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Parent directory does not exist: {path}")


class InvalidPathError(FileSystemError):
    """Raised when a path is invalid or malformed."""

    def __init__(self, path: str, reason: str = "Invalid path"):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class PathTypeError(FileSystemError):
    """Raised when a path exists but is of the wrong kind for the operation."""

    expected = "entry"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path is not a {self.expected}: {path}")


class ExpectedFileError(PathTypeError):
    """Raised when a file operation targets a directory."""

    expected = "file"


class ExpectedDirectoryError(PathTypeError):
    """Raised when a directory operation targets a file."""

    expected = "directory"


class FileSizeLimitExceededError(FileSystemError):
    """Raised when a file exceeds the size limit."""

    def __init__(self, path: str, size: int, limit: int):
        self.path = path
        self.size = size
        self.limit = limit
        super().__init__(f"File too large ({size} bytes > {limit} bytes): {path}")


class FileReadError(FileSystemError):
    """Raised when the underlying storage refuses a read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class FileWriteError(FileSystemError):
    """Raised when the underlying storage refuses a write."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")


class EditNotFoundError(FileSystemError):
    """Raised when an edit's old text matches neither exactly nor fuzzily."""

    def __init__(self, old_text: str):
        self.old_text = old_text
        super().__init__(f"Could not find exact match for edit:\n{old_text}")


class SearchError(FileSystemError):
    """Raised when a search operation fails."""

    pass
