"""
File store facade.

Resolves every derived location against the storage root and persists
JSON-shaped state as flat named blobs. Failures are logged and degrade to
absent results: everything kept here is a cache or a resumable queue, so
a lost write is retried on the next save and a corrupt blob reads as
"no prior state".

Layout under the durable root:
    downloads/{library}/{item_key}/{filename_stem}
    annotations/{library}/{document_key}/{annotation_key}[_dark].png
    jsons/{library}/{kind_folder}/{key}.json
    uploads, activeUrlSessionIds, shareExtensionObservedUrlSessionIds, schema.json
    maindb_{user_id}.{ext}, translators.{ext}
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Any, BinaryIO, TypeVar

from . import paths
from .config import StorageConfig
from .content import content_hash, looks_like_pdf
from .exceptions import BlobNotFoundError, DeserializationError, StorageIOError
from .identifiers import LibraryIdentifier, ObjectKind
from .local.file_ops import ensure_directory, file_exists, read_text, remove_file, write_text_atomic
from .local.platform import LocalContentResolver
from .logging_utils import StorageLoggerAdapter, get_storage_logger
from .marshaling import DataMarshaller, ListSchema, MapSchema, ObjectSchema, Schema
from .protocol import AssetProvider, ContentResolver
from .root import StorageRoot

logger = get_storage_logger("file_store")

T = TypeVar("T")
K = TypeVar("K")


class FileStore:
    """Stores objects and object trees in files.

    Contract:
    - Inputs: logical identities (library, keys, filenames, blob names)
    - Outputs: absolute paths, loaded values or None
    - Side Effects: directory creation, blob writes and deletes
    """

    def __init__(
        self,
        root: StorageRoot,
        config: StorageConfig | None = None,
        marshaller: DataMarshaller | None = None,
        content_resolver: ContentResolver | None = None,
        asset_provider: AssetProvider | None = None,
    ) -> None:
        self.root = root
        self.config = config or StorageConfig()
        self.marshaller = marshaller or DataMarshaller()
        self.content_resolver = content_resolver or LocalContentResolver()
        self.asset_provider = asset_provider

        ext = self.config.db_extension
        self.db_file = self.path_for_filename(paths.main_db_name(self.config.user_id, ext))
        self.bundled_data_db_file = self.path_for_filename(paths.bundled_data_db_name(ext))

    @classmethod
    def create(
        cls,
        config: StorageConfig,
        marshaller: DataMarshaller | None = None,
        content_resolver: ContentResolver | None = None,
        asset_provider: AssetProvider | None = None,
    ) -> FileStore:
        """Initialize the storage root from configuration and build a store."""
        root = StorageRoot.initialize(config)
        return cls(root, config, marshaller, content_resolver, asset_provider)

    # -- Roots and named files -------------------------------------------------

    @property
    def root_directory(self) -> Path:
        return self.root.durable_root()

    def caches_directory(self) -> Path:
        """Purgeable cache directory, recreated if the OS cleared it."""
        return self.root.cache_root()

    def cache_file(self, name: str) -> Path:
        """Scratch file under the cache root."""
        return self.root.resolve(self.caches_directory(), paths.blob_path(name))

    def path_for_filename(self, filename: str) -> Path:
        return self.root.resolve_durable(paths.blob_path(filename))

    def file_for_filename(self, filename: str | None) -> Path | None:
        """Path of a named blob, or None for an empty name."""
        if not filename:
            return None
        return self.path_for_filename(filename)

    def file_exists(self, filename: str | None) -> bool:
        path = self.file_for_filename(filename)
        return path is not None and file_exists(path)

    def delete_data_with_filename(self, filename: str | None) -> None:
        """Delete a named blob. Missing blobs are ignored."""
        path = self.file_for_filename(filename)
        if path is None:
            return
        try:
            remove_file(path)
        except StorageIOError as e:
            logger.error("Unable to delete file = %s: %s", filename, e.cause, exc_info=e)

    # -- Derived locations -----------------------------------------------------

    def _ensure_dir(self, relative: PurePosixPath) -> Path:
        folder = self.root.resolve_durable(relative)
        ensure_directory(folder)
        return folder

    def attachment_file(
        self,
        library_id: LibraryIdentifier,
        key: str,
        filename: str,
        content_type: str | None = None,
    ) -> Path:
        """Location of a downloaded attachment. Its folder exists on return.

        ``content_type`` is accepted for callers that track it; the stored
        name never carries an extension.
        """
        relative = paths.attachment_path(library_id, key, filename)
        self._ensure_dir(relative.parent)
        return self.root.resolve_durable(relative)

    def annotation_preview(
        self,
        annotation_key: str,
        pdf_key: str,
        library_id: LibraryIdentifier,
        is_dark: bool,
    ) -> Path:
        name = paths.annotation_preview_name(annotation_key, is_dark)
        folder = self._ensure_dir(paths.annotation_previews_dir(library_id, pdf_key))
        return folder / name

    def annotation_previews(
        self,
        library_id: LibraryIdentifier | None = None,
        pdf_key: str | None = None,
    ) -> Path:
        """Preview folder for one document, one library, or all libraries."""
        return self._ensure_dir(paths.annotation_previews_dir(library_id, pdf_key))

    def json_cache_file(self, kind: ObjectKind, library_id: LibraryIdentifier, key: str) -> Path:
        relative = paths.json_cache_path(kind, library_id, key)
        self._ensure_dir(relative.parent)
        return self.root.resolve_durable(relative)

    # -- Blobs -----------------------------------------------------------------

    def save_object(self, value: Any, filename: str) -> None:
        """Serialize a value into JSON and store it under a blob name.

        ``None`` is not written. A failed write is logged; the caller's
        in-memory state stays authoritative until the next save.
        """
        if value is None:
            return
        data = self.marshaller.marshal(value)
        self._write_data_to_file_with_name(filename, data)

    def _write_data_to_file_with_name(self, filename: str, data: str) -> None:
        try:
            write_text_atomic(self.path_for_filename(filename), data)
        except StorageIOError as e:
            log = StorageLoggerAdapter(logger, {"blob": filename})
            log.error("Unable to write data to file = %s: %s", filename, e.cause, exc_info=e)

    def read_blob_text(self, filename: str | None) -> str:
        """Raw text of a named blob.

        Raises:
            BlobNotFoundError: The blob does not exist
            StorageIOError: The blob exists but cannot be read
        """
        path = self.file_for_filename(filename)
        text = read_text(path) if path is not None else None
        if text is None:
            raise BlobNotFoundError(filename or "", str(path) if path else None)
        return text

    def load_object(self, filename: str, schema: Schema[T]) -> T | None:
        """Load a blob and decode it against a schema.

        Returns None when the blob is missing, unreadable, or does not
        decode to the requested shape.
        """
        log = StorageLoggerAdapter(logger, {"blob": filename})
        try:
            text = self.read_blob_text(filename)
        except BlobNotFoundError:
            return None
        except StorageIOError as e:
            log.warning("Unable to read file = %s: %s", filename, e.cause, exc_info=e)
            return None

        try:
            return self.marshaller.unmarshal(text, schema)
        except DeserializationError as e:
            log.warning("Discarding unreadable data in file = %s: %s", filename, e.message)
            return None

    def load_list_data_with_filename(self, filename: str, item: Any) -> list[Any] | None:
        return self.load_object(filename, ListSchema(item))

    def load_map_data_with_filename(
        self, filename: str, key: type[K], value: Any
    ) -> dict[K, Any] | None:
        return self.load_object(filename, MapSchema(key, value))

    # -- Schema asset ----------------------------------------------------------

    def load_asset_json(self, asset_name: str) -> dict[str, Any]:
        """Load a bundled asset as a JSON object.

        Raises:
            FileNotFoundError: No asset provider, or no such asset
            DeserializationError: The asset is not a JSON object
        """
        if self.asset_provider is None:
            raise FileNotFoundError(f"No asset provider configured for {asset_name}")
        with self.asset_provider.open_asset(asset_name) as stream:
            text = stream.read().decode("utf-8")
        return self.marshaller.unmarshal(text, ObjectSchema())

    def get_bundled_schema(self) -> dict[str, Any] | None:
        try:
            return self.load_asset_json(paths.SCHEMA_BLOB)
        except (OSError, UnicodeDecodeError, DeserializationError) as e:
            logger.debug("Failed to load bundled schema: %s", e)
            return None

    def save_bundled_schema(self, data: dict[str, Any]) -> None:
        self.save_object(data, paths.SCHEMA_BLOB)

    def load_cached_schema(self) -> dict[str, Any] | None:
        return self.load_object(paths.SCHEMA_BLOB, ObjectSchema())

    def seed_schema_cache(self) -> bool:
        """Copy the bundled schema into the durable root if none is cached.

        Returns:
            True if a cached schema exists after the call
        """
        if self.load_cached_schema() is not None:
            return True
        schema = self.get_bundled_schema()
        if schema is None:
            return False
        self.save_bundled_schema(schema)
        return self.file_exists(paths.SCHEMA_BLOB)

    # -- Content helpers -------------------------------------------------------

    def md5(self, file: Path) -> str | None:
        return content_hash(file, "md5")

    def is_pdf(self, file: Path) -> bool:
        return looks_like_pdf(file)

    def get_file_size(self, handle: Any) -> int | None:
        return self.content_resolver.size(handle)

    def open_input_stream(self, handle: Any) -> BinaryIO | None:
        return self.content_resolver.open_stream(handle)

    def get_type(self, handle: Any) -> str | None:
        return self.content_resolver.mime_type(handle)
