"""
File operations for local storage.

Provides the synchronous read/write primitives the file store is built on:
- Idempotent directory creation
- Atomic text writes using temp file + rename
- Scoped file handles released on every exit path
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from ..exceptions import DirectoryCreationError, StorageIOError

logger = logging.getLogger(__name__)


def ensure_directory(path: Path, strict: bool = False) -> bool:
    """Ensure directory exists, creating missing parents.

    Creating a directory that already exists is a no-op. In the default
    non-strict mode a failure is logged and reported through the return
    value, leaving the next read or write against the path to fail on its
    own.

    Args:
        path: Directory path to ensure exists
        strict: Raise DirectoryCreationError instead of logging

    Returns:
        True if the directory exists after the call
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        error = DirectoryCreationError(str(path), e)
        if strict:
            raise error from e
        logger.warning("Unable to create directory %s: %s", path, e, exc_info=error)
        return False


def read_text(path: Path) -> str | None:
    """Read a UTF-8 text file.

    Args:
        path: Path to read

    Returns:
        File content, or None if the file doesn't exist
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise StorageIOError("read_text", str(path), e) from e


def write_text_atomic(path: Path, content: str) -> None:
    """Write a UTF-8 text file atomically using temp file + rename.

    The target is fully replaced; readers never observe a partial file.

    Args:
        path: Target path
        content: Text to write
    """
    ensure_directory(path.parent)

    try:
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".tmp_{path.name}_")
    except OSError as e:
        raise StorageIOError("write_text", str(path), e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename
        os.replace(temp_path, path)
    except OSError as e:
        try:
            os.remove(temp_path)
        except OSError:
            pass
        raise StorageIOError("write_text", str(path), e) from e


def read_head(path: Path, size: int) -> bytes:
    """Read up to ``size`` bytes from the start of a file."""
    try:
        with path.open("rb") as f:
            return f.read(size)
    except OSError as e:
        raise StorageIOError("read_head", str(path), e) from e


def file_exists(path: Path) -> bool:
    """Check if a file exists.

    Args:
        path: Path to check

    Returns:
        True if file exists
    """
    try:
        return path.exists()
    except OSError:
        return False


def remove_file(path: Path) -> bool:
    """Remove a file if it exists.

    Args:
        path: Path to remove

    Returns:
        True if file was removed, False if it didn't exist
    """
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageIOError("remove", str(path), e) from e
