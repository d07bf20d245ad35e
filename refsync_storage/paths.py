"""Path scheme for everything the file store keeps on disk.

Centralizes the layout knowledge so callers never construct paths
themselves. Every function here is pure: the same inputs give the same
relative path, across processes and restarts.

Attachments:        downloads/{library}/{item_key}/{filename_stem}
Annotation preview: annotations/{library}/{document_key}/{annotation_key}[_dark].png
JSON cache:         jsons/{library}/{kind_folder}/{key}.json
Named blobs:        {name}
"""

from __future__ import annotations

from pathlib import PurePosixPath

from .exceptions import InvalidPathSegmentError
from .identifiers import LibraryIdentifier, ObjectKind, kind_folder

DOWNLOADS_DIR = "downloads"
ANNOTATIONS_DIR = "annotations"
JSONS_DIR = "jsons"

DARK_SUFFIX = "_dark"
PREVIEW_EXTENSION = "png"
JSON_EXTENSION = "json"

UPLOADS_BLOB = "uploads"
SESSION_IDS_BLOB = "activeUrlSessionIds"
SHARE_EXTENSION_SESSION_IDS_BLOB = "shareExtensionObservedUrlSessionIds"
SCHEMA_BLOB = "schema.json"

MAIN_DB_PREFIX = "maindb_"
BUNDLED_DATA_DB_NAME = "translators"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")


def validate_segment(segment: str) -> str:
    """Check that a single path segment can be joined as-is.

    Segments are never rewritten, so distinct inputs keep distinct paths.
    A separator or NUL, or a segment of ``""``, ``.`` or ``..``, raises
    InvalidPathSegmentError.
    """
    if segment in ("", ".", ".."):
        raise InvalidPathSegmentError(segment, "segment must name a file or directory")
    for char in _FORBIDDEN_CHARS:
        if char in segment:
            raise InvalidPathSegmentError(segment, f"segment must not contain {char!r}")
    return segment


def _join(*segments: str) -> PurePosixPath:
    return PurePosixPath(*(validate_segment(s) for s in segments))


def split_filename(filename: str) -> tuple[str, str]:
    """Split a filename into (stem, extension) on the last ``.``.

    >>> split_filename("report.v2.pdf")
    ('report.v2', 'pdf')
    >>> split_filename("README")
    ('README', '')
    """
    stem, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return stem, ext


def attachment_dir(library_id: LibraryIdentifier, key: str) -> PurePosixPath:
    """Folder holding the downloaded file of one attachment item."""
    return _join(DOWNLOADS_DIR, library_id.folder_name, key)


def attachment_path(library_id: LibraryIdentifier, key: str, filename: str) -> PurePosixPath:
    """Downloaded attachment file. The extension is not part of the stored name.

    Dotfiles such as ``.notes`` have an empty stem and keep their full name.
    A filename of ``""``, ``.`` or ``..`` would name the item folder itself
    and raises InvalidPathSegmentError.
    """
    stem, _ = split_filename(filename)
    return attachment_dir(library_id, key) / validate_segment(stem or filename)


def annotation_previews_dir(
    library_id: LibraryIdentifier | None = None,
    document_key: str | None = None,
) -> PurePosixPath:
    """Preview folder: global, per library, or per document."""
    if library_id is None:
        if document_key is not None:
            raise ValueError("document_key requires library_id")
        return _join(ANNOTATIONS_DIR)
    if document_key is None:
        return _join(ANNOTATIONS_DIR, library_id.folder_name)
    return _join(ANNOTATIONS_DIR, library_id.folder_name, document_key)


def annotation_preview_name(annotation_key: str, is_dark: bool) -> str:
    suffix = DARK_SUFFIX if is_dark else ""
    return validate_segment(f"{annotation_key}{suffix}.{PREVIEW_EXTENSION}")


def annotation_preview_path(
    annotation_key: str,
    document_key: str,
    library_id: LibraryIdentifier,
    is_dark: bool,
) -> PurePosixPath:
    """Rendered preview image of one annotation."""
    folder = annotation_previews_dir(library_id, document_key)
    return folder / annotation_preview_name(annotation_key, is_dark)


def json_cache_dir(kind: ObjectKind, library_id: LibraryIdentifier) -> PurePosixPath:
    return _join(JSONS_DIR, library_id.folder_name, kind_folder(kind))


def json_cache_path(kind: ObjectKind, library_id: LibraryIdentifier, key: str) -> PurePosixPath:
    """Cached remote JSON payload of one synced object."""
    return json_cache_dir(kind, library_id) / validate_segment(f"{key}.{JSON_EXTENSION}")


def blob_path(name: str) -> PurePosixPath:
    """Flat named blob directly under a root."""
    return _join(name)


def main_db_name(user_id: int | str, extension: str) -> str:
    return f"{MAIN_DB_PREFIX}{user_id}.{extension}"


def bundled_data_db_name(extension: str) -> str:
    return f"{BUNDLED_DATA_DB_NAME}.{extension}"
