"""
Low-level text I/O shared by the handlers.

Reads and writes keep line endings untouched (``newline=""``) so that a
write followed by a read returns the exact same string.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from sandbox_fs.filesystem.exceptions import FileReadError, FileWriteError

logger = logging.getLogger(__name__)


def _describe(error: Exception) -> str:
    return getattr(error, "strerror", None) or str(error)


def read_text(path: Path, encoding: str = "utf-8", label: Optional[str] = None) -> str:
    """
    Read a text file without newline translation.

    ``label`` names the file in raised errors (default: ``path``).

    Raises:
        FileNotFoundError: If the file doesn't exist
        FileReadError: If the file can't be read or decoded
    """
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            return f.read()
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read file {path}: {e}")
        raise FileReadError(label or str(path), _describe(e)) from e


def atomic_write_text(
    path: Path, content: str, encoding: str = "utf-8", label: Optional[str] = None
) -> int:
    """
    Write text through a temporary sibling file and an atomic replace.

    A reader never observes a half-written file: either the old content or
    the new content is in place.

    Returns:
        Number of bytes written

    Raises:
        FileWriteError: If the content can't be written
    """
    # Replace the link target, not the link itself.
    path = Path(os.path.realpath(path))
    data = content.encode(encoding)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
        )
    except OSError as e:
        logger.error(f"Failed to write file {path}: {e}")
        raise FileWriteError(label or str(path), _describe(e)) from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        mode = path.stat().st_mode & 0o7777 if path.exists() else 0o644
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except OSError as e:
        logger.error(f"Failed to write file {path}: {e}")
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise FileWriteError(label or str(path), _describe(e)) from e
    return len(data)
