"""
Shared test configuration and fixtures.

Every fixture builds on a fresh temporary directory, so tests never touch
the real platform data or cache directories.
"""

import tempfile
from collections.abc import Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from refsync_storage import (
    AuxiliaryStateStore,
    BackgroundUpload,
    FileStore,
    LibraryIdentifier,
    StorageConfig,
    UploadKind,
)


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir: Path) -> StorageConfig:
    """Storage configuration rooted in the temporary directory."""
    return StorageConfig(
        user_id=42,
        data_dir=str(temp_dir / "files"),
        cache_dir=str(temp_dir / "platform-cache"),
    )


@pytest.fixture
def file_store(config: StorageConfig) -> FileStore:
    """File store with an initialized root."""
    return FileStore.create(config)


@pytest.fixture
def state_store(file_store: FileStore) -> AuxiliaryStateStore:
    """Auxiliary state store over the file store."""
    return AuxiliaryStateStore(file_store)


@pytest.fixture
def library() -> LibraryIdentifier:
    """Personal library used across tests."""
    return LibraryIdentifier.custom(1)


def _make_upload(key: str = "ABCD1234", **overrides) -> BackgroundUpload:
    fields = {
        "kind": UploadKind.ZOTERO,
        "key": key,
        "library_id": LibraryIdentifier.custom(1),
        "user_id": 42,
        "remote_url": "https://uploads.example.org/upload",
        "file_path": f"/data/downloads/L1/{key}/paper",
        "md5": "9e107d9d372bb6826bd81d3542a419d6",
        "date": datetime(2024, 5, 1, 12, 30, tzinfo=UTC),
        "upload_key": "upload-key-1",
    }
    fields.update(overrides)
    return BackgroundUpload(**fields)


@pytest.fixture
def make_upload():
    """Factory for upload descriptors with sensible defaults."""
    return _make_upload
