"""Tests for local file operations."""

import logging
from pathlib import Path

import pytest

from refsync_storage import DirectoryCreationError, StorageIOError
from refsync_storage.local.file_ops import (
    ensure_directory,
    file_exists,
    read_head,
    read_text,
    remove_file,
    write_text_atomic,
)


@pytest.fixture
def blocked_dir(temp_dir: Path) -> Path:
    """A directory path whose parent is a regular file."""
    blocker = temp_dir / "blocker"
    blocker.write_text("not a directory")
    return blocker / "child"


class TestEnsureDirectory:
    """Tests for ensure_directory."""

    def test_creates_parents(self, temp_dir: Path):
        """Missing intermediate directories are created."""
        target = temp_dir / "a" / "b" / "c"
        assert ensure_directory(target) is True
        assert target.is_dir()

    def test_existing_directory_is_noop(self, temp_dir: Path):
        """Calling twice is harmless."""
        assert ensure_directory(temp_dir) is True
        assert ensure_directory(temp_dir) is True

    def test_strict_raises_directory_creation_error(self, blocked_dir: Path):
        """Strict mode reports the failure to the caller."""
        with pytest.raises(DirectoryCreationError) as exc_info:
            ensure_directory(blocked_dir, strict=True)

        error = exc_info.value
        assert isinstance(error, StorageIOError)
        assert error.operation == "create_directory"
        assert error.path == str(blocked_dir)
        assert isinstance(error.__cause__, OSError)

    def test_non_strict_logs_directory_creation_error(self, blocked_dir: Path, caplog):
        """Default mode logs the same error and returns False."""
        with caplog.at_level(logging.WARNING, logger="refsync_storage"):
            assert ensure_directory(blocked_dir) is False

        record = next(r for r in caplog.records if r.levelno == logging.WARNING)
        assert isinstance(record.exc_info[1], DirectoryCreationError)
        assert record.exc_info[1].details["path"] == str(blocked_dir)


class TestAtomicWrite:
    """Tests for write_text_atomic and read_text."""

    def test_write_then_read(self, temp_dir: Path):
        path = temp_dir / "blob"
        write_text_atomic(path, "Müller")
        assert read_text(path) == "Müller"

    def test_replaces_content(self, temp_dir: Path):
        """The target is replaced, never appended to."""
        path = temp_dir / "blob"
        write_text_atomic(path, "first, and longer")
        write_text_atomic(path, "second")
        assert read_text(path) == "second"

    def test_creates_parent(self, temp_dir: Path):
        path = temp_dir / "nested" / "blob"
        write_text_atomic(path, "x")
        assert path.is_file()

    def test_failure_leaves_no_temp_file(self, temp_dir: Path):
        """A failed rename removes the temp file it wrote."""
        path = temp_dir / "taken"
        path.mkdir()

        with pytest.raises(StorageIOError):
            write_text_atomic(path, "x")

        assert [p.name for p in temp_dir.iterdir()] == ["taken"]

    def test_read_missing_is_none(self, temp_dir: Path):
        """A missing file reads as None rather than raising."""
        assert read_text(temp_dir / "missing") is None


class TestSmallHelpers:
    """Tests for read_head, file_exists and remove_file."""

    def test_read_head_short_file(self, temp_dir: Path):
        """Short files give back what they have."""
        path = temp_dir / "short"
        path.write_bytes(b"%P")
        assert read_head(path, 4) == b"%P"

    def test_read_head_missing_raises(self, temp_dir: Path):
        with pytest.raises(StorageIOError):
            read_head(temp_dir / "missing", 4)

    def test_remove_file(self, temp_dir: Path):
        """Removing reports whether there was anything to remove."""
        path = temp_dir / "gone"
        path.write_text("x")

        assert remove_file(path) is True
        assert file_exists(path) is False
        assert remove_file(path) is False
