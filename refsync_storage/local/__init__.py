"""
Local filesystem primitives.

Key pieces:
- file_ops: directory creation, atomic text writes, scoped reads
- platform: filesystem-backed ContentResolver and AssetProvider
"""

from .file_ops import (
    ensure_directory,
    file_exists,
    read_head,
    read_text,
    remove_file,
    write_text_atomic,
)
from .platform import (
    DirectoryAssetProvider,
    LocalContentResolver,
    PackageAssetProvider,
    handle_to_path,
)

__all__ = [
    # Low-level file operations
    "ensure_directory",
    "file_exists",
    "read_head",
    "read_text",
    "remove_file",
    "write_text_atomic",
    # Platform services
    "LocalContentResolver",
    "DirectoryAssetProvider",
    "PackageAssetProvider",
    "handle_to_path",
]
