"""
Background upload descriptors.

A descriptor records everything needed to finish an attachment upload
that was handed to a background transfer: where the file is, where it is
going, and how to register it once the transfer completes. Pending
descriptors are persisted so uploads survive a process restart.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .identifiers import LibraryIdentifier


class UploadKind(Enum):
    """Remote file storage an upload goes to."""

    ZOTERO = "zotero"
    WEBDAV = "webdav"


@dataclass
class BackgroundUpload:
    """A pending attachment upload.

    Attributes:
        kind: Target storage
        key: Attachment item key
        library_id: Library the attachment belongs to
        user_id: Owner user id
        remote_url: Upload destination
        file_path: Local file being uploaded
        md5: Content hash of the local file
        date: When the upload was started
        upload_key: Server-issued upload key (ZOTERO uploads)
        mtime: Modification time to register (WEBDAV uploads)
    """

    kind: UploadKind
    key: str
    library_id: LibraryIdentifier
    user_id: int
    remote_url: str
    file_path: str
    md5: str
    date: datetime
    upload_key: str | None = None
    mtime: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for storage."""
        return {
            "kind": self.kind.value,
            "key": self.key,
            "library_id": self.library_id.folder_name,
            "user_id": self.user_id,
            "remote_url": self.remote_url,
            "file_path": self.file_path,
            "md5": self.md5,
            "date": self.date.isoformat(),
            "upload_key": self.upload_key,
            "mtime": self.mtime,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BackgroundUpload:
        """Deserialize from dictionary.

        Raises KeyError, TypeError or ValueError on malformed input.
        """
        return cls(
            kind=UploadKind(data["kind"]),
            key=data["key"],
            library_id=LibraryIdentifier.from_folder_name(data["library_id"]),
            user_id=data["user_id"],
            remote_url=data["remote_url"],
            file_path=data["file_path"],
            md5=data["md5"],
            date=datetime.fromisoformat(data["date"]),
            upload_key=data.get("upload_key"),
            mtime=data.get("mtime"),
        )
