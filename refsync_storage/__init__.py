"""
Refsync Storage

File-storage layer of a reference-management sync client.

Provides:
- A storage root with a durable directory and a purgeable cache directory
- Deterministic locations for attachments, annotation previews and
  per-object JSON caches
- JSON blobs for the upload queue and network session identifiers
- Content hashing and PDF sniffing

Usage:

    >>> from refsync_storage import (
    ...     AuxiliaryStateStore, FileStore, LibraryIdentifier, StorageConfig
    ... )
    >>> store = FileStore.create(StorageConfig.from_environment())
    >>> path = store.attachment_file(LibraryIdentifier.custom(1), "ABCD", "paper.pdf")
    >>> state = AuxiliaryStateStore(store)
    >>> state.save_sessions(["session-1"])
    >>> state.get_session_ids()
    ['session-1']
"""

from .config import StorageConfig
from .content import content_hash, looks_like_pdf
from .exceptions import (
    BlobNotFoundError,
    DeserializationError,
    DirectoryCreationError,
    FileStoreError,
    InvalidPathSegmentError,
    StorageIOError,
)
from .file_store import FileStore
from .identifiers import KIND_FOLDERS, LibraryIdentifier, LibraryKind, ObjectKind
from .logging_utils import configure_structured_logging, get_storage_logger
from .marshaling import (
    SESSION_IDS_SCHEMA,
    UPLOADS_SCHEMA,
    DataMarshaller,
    ListSchema,
    MapSchema,
    ObjectSchema,
    RecordSchema,
)
from .protocol import AssetProvider, ContentResolver
from .root import StorageRoot
from .state import AuxiliaryStateStore, BlobAccessor
from .uploads import BackgroundUpload, UploadKind

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "StorageConfig",
    "StorageRoot",
    # Identifiers
    "LibraryIdentifier",
    "LibraryKind",
    "ObjectKind",
    "KIND_FOLDERS",
    # Storage
    "FileStore",
    "AuxiliaryStateStore",
    "BlobAccessor",
    "BackgroundUpload",
    "UploadKind",
    # Marshaling
    "DataMarshaller",
    "ListSchema",
    "MapSchema",
    "ObjectSchema",
    "RecordSchema",
    "UPLOADS_SCHEMA",
    "SESSION_IDS_SCHEMA",
    # Content
    "content_hash",
    "looks_like_pdf",
    # Platform protocols
    "ContentResolver",
    "AssetProvider",
    # Logging
    "configure_structured_logging",
    "get_storage_logger",
    # Exceptions
    "FileStoreError",
    "BlobNotFoundError",
    "DeserializationError",
    "StorageIOError",
    "DirectoryCreationError",
    "InvalidPathSegmentError",
]
