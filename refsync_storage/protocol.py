"""
Protocols for platform services the file store consumes.

The store never resolves platform content handles or reads bundled assets
itself; it delegates to implementations of these protocols. Local
filesystem implementations live in ``refsync_storage.local.platform``.
"""

from __future__ import annotations

from typing import Any, BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ContentResolver(Protocol):
    """Access to content behind an opaque platform handle."""

    def open_stream(self, handle: Any) -> BinaryIO | None:
        """Open a byte stream for the handle, or None if it cannot be opened.

        The caller owns the returned stream and must close it.
        """
        ...

    def size(self, handle: Any) -> int | None:
        """Size of the content in bytes, or None if unknown."""
        ...

    def mime_type(self, handle: Any) -> str | None:
        """MIME type of the content, or None if unknown."""
        ...


@runtime_checkable
class AssetProvider(Protocol):
    """Read-only access to assets bundled with the application."""

    def open_asset(self, name: str) -> BinaryIO:
        """Open a bundled asset.

        Raises:
            FileNotFoundError: If no asset with that name exists
        """
        ...
