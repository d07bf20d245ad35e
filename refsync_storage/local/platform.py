"""
Local filesystem implementations of the platform protocols.

Content handles are filesystem paths or ``file://`` URIs. Assets come
from a directory or from data files shipped inside a Python package.
"""

from __future__ import annotations

import logging
import mimetypes
from importlib import resources
from pathlib import Path
from typing import Any, BinaryIO
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)


def handle_to_path(handle: Any) -> Path:
    """Convert a path or ``file://`` URI handle to a Path.

    Raises ValueError for URIs with any other scheme.
    """
    if isinstance(handle, Path):
        return handle
    text = str(handle)
    if "://" not in text:
        return Path(text)
    parsed = urlparse(text)
    if parsed.scheme != "file":
        raise ValueError(f"Unsupported content handle scheme: {parsed.scheme}")
    return Path(unquote(parsed.path))


class LocalContentResolver:
    """ContentResolver for handles that point at local files."""

    def open_stream(self, handle: Any) -> BinaryIO | None:
        try:
            return handle_to_path(handle).open("rb")
        except (OSError, ValueError) as e:
            logger.warning("Unable to open stream for %s: %s", handle, e)
            return None

    def size(self, handle: Any) -> int | None:
        try:
            return handle_to_path(handle).stat().st_size
        except (OSError, ValueError):
            return None

    def mime_type(self, handle: Any) -> str | None:
        try:
            path = handle_to_path(handle)
        except ValueError:
            return None
        mime_type, _ = mimetypes.guess_type(path.name)
        return mime_type


class DirectoryAssetProvider:
    """AssetProvider reading assets from a directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def open_asset(self, name: str) -> BinaryIO:
        path = self.directory / name
        if self.directory.resolve() not in path.resolve().parents:
            raise FileNotFoundError(f"Asset outside asset directory: {name}")
        return path.open("rb")


class PackageAssetProvider:
    """AssetProvider reading data files shipped inside a Python package."""

    def __init__(self, package: str, subdirectory: str | None = None):
        self.package = package
        self.subdirectory = subdirectory

    def open_asset(self, name: str) -> BinaryIO:
        root = resources.files(self.package)
        if self.subdirectory:
            root = root.joinpath(self.subdirectory)
        asset = root.joinpath(name)
        if not asset.is_file():
            raise FileNotFoundError(f"Asset not found in {self.package}: {name}")
        return asset.open("rb")
