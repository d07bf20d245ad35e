"""
Library and object-kind identifiers used as path components.

Folder names:
    Custom (personal) library: L{library_id}
    Group library: G{group_id}

The folder name is durable: it is written into paths on disk and into
persisted upload descriptors, so the projection must never change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_FOLDER_NAME_RE = re.compile(r"^([LG])(\d+)$")


class LibraryKind(Enum):
    """Namespace a library belongs to."""

    CUSTOM = "custom"
    GROUP = "group"


_KIND_PREFIXES = {
    LibraryKind.CUSTOM: "L",
    LibraryKind.GROUP: "G",
}


@dataclass(frozen=True)
class LibraryIdentifier:
    """Identity of a personal or group library."""

    kind: LibraryKind
    library_id: int

    def __post_init__(self) -> None:
        if isinstance(self.library_id, bool) or not isinstance(self.library_id, int):
            raise ValueError(f"library_id must be an int, got {self.library_id!r}")
        if self.library_id < 0:
            raise ValueError(f"library_id must be >= 0, got {self.library_id}")

    @classmethod
    def custom(cls, library_id: int) -> LibraryIdentifier:
        return cls(LibraryKind.CUSTOM, library_id)

    @classmethod
    def group(cls, group_id: int) -> LibraryIdentifier:
        return cls(LibraryKind.GROUP, group_id)

    @property
    def folder_name(self) -> str:
        """Filesystem-safe folder name, unique per identifier."""
        return f"{_KIND_PREFIXES[self.kind]}{self.library_id}"

    @classmethod
    def from_folder_name(cls, folder_name: str) -> LibraryIdentifier:
        """Parse a folder name produced by ``folder_name``.

        Raises ValueError on malformed input.
        """
        match = _FOLDER_NAME_RE.match(folder_name)
        if match is None:
            raise ValueError(f"Malformed library folder name: {folder_name!r}")
        kind = LibraryKind.CUSTOM if match.group(1) == "L" else LibraryKind.GROUP
        return cls(kind, int(match.group(2)))

    def __str__(self) -> str:
        return self.folder_name


class ObjectKind(Enum):
    """Categories of synced objects that have per-object JSON caches."""

    COLLECTION = "collection"
    ITEM = "item"
    TRASH = "trash"
    SEARCH = "search"
    SETTINGS = "settings"


# Trashed items are cached alongside live items.
KIND_FOLDERS: dict[ObjectKind, str] = {
    ObjectKind.COLLECTION: "collection",
    ObjectKind.ITEM: "item",
    ObjectKind.TRASH: "item",
    ObjectKind.SEARCH: "search",
    ObjectKind.SETTINGS: "settings",
}

_unmapped = set(ObjectKind) - KIND_FOLDERS.keys()
if _unmapped:
    raise RuntimeError(f"ObjectKind values without a cache folder: {sorted(_unmapped, key=str)}")


def kind_folder(kind: ObjectKind) -> str:
    """Cache sub-folder name for an object kind."""
    return KIND_FOLDERS[kind]
