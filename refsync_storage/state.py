"""
Auxiliary state persisted outside the main database.

Three small collections are kept as flat JSON blobs under the durable root:

- uploads: pending background uploads, task id -> BackgroundUpload
- activeUrlSessionIds: identifiers of live background network sessions
- shareExtensionObservedUrlSessionIds: session identifiers seen by the
  share extension

Saving replaces the whole collection; the last writer wins.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from . import paths
from .file_store import FileStore
from .logging_utils import get_storage_logger
from .marshaling import SESSION_IDS_SCHEMA, UPLOADS_SCHEMA, Schema
from .uploads import BackgroundUpload

logger = get_storage_logger("state")

C = TypeVar("C")


class BlobAccessor(Generic[C]):
    """Typed load/save/delete for one named blob."""

    def __init__(self, file_store: FileStore, name: str, schema: Schema[C]):
        self.file_store = file_store
        self.name = name
        self.schema = schema

    def load(self) -> C | None:
        """Stored collection, or None if nothing (readable) is stored."""
        return self.file_store.load_object(self.name, self.schema)

    def save(self, collection: C) -> None:
        self.file_store.save_object(collection, self.name)

    def delete_all(self) -> None:
        logger.debug("Deleting blob %s", self.name)
        self.file_store.delete_data_with_filename(self.name)

    def exists(self) -> bool:
        return self.file_store.file_exists(self.name)


class AuxiliaryStateStore:
    """Accessors for the upload queue and network session identifiers."""

    def __init__(self, file_store: FileStore):
        self.file_store = file_store
        self.uploads: BlobAccessor[dict[int, BackgroundUpload]] = BlobAccessor(
            file_store, paths.UPLOADS_BLOB, UPLOADS_SCHEMA
        )
        self.session_ids: BlobAccessor[list[str]] = BlobAccessor(
            file_store, paths.SESSION_IDS_BLOB, SESSION_IDS_SCHEMA
        )
        self.share_extension_session_ids: BlobAccessor[list[str]] = BlobAccessor(
            file_store, paths.SHARE_EXTENSION_SESSION_IDS_BLOB, SESSION_IDS_SCHEMA
        )

    def get_uploads(self) -> dict[int, BackgroundUpload] | None:
        return self.uploads.load()

    def save_uploads(self, uploads: dict[int, BackgroundUpload]) -> None:
        self.uploads.save(uploads)

    def delete_all_uploads(self) -> None:
        self.uploads.delete_all()

    def get_session_ids(self) -> list[str] | None:
        return self.session_ids.load()

    def save_sessions(self, identifiers: list[str]) -> None:
        self.session_ids.save(identifiers)

    def delete_all_session_ids(self) -> None:
        self.session_ids.delete_all()

    def get_share_extension_session_ids(self) -> list[str] | None:
        return self.share_extension_session_ids.load()

    def save_share_extension_sessions(self, identifiers: list[str]) -> None:
        self.share_extension_session_ids.save(identifiers)

    def delete_all_share_extension_session_ids(self) -> None:
        self.share_extension_session_ids.delete_all()
