"""
Root directories of the file store.

A StorageRoot is produced once by ``StorageRoot.initialize`` and handed to
every component that needs it. It holds two directories:

- durable: survives app updates, holds everything the user's data needs
- cache: purgeable, may be cleared by the OS under storage pressure
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .config import StorageConfig
from .exceptions import InvalidPathSegmentError
from .local.file_ops import ensure_directory

logger = logging.getLogger(__name__)

CACHE_SUBDIRECTORY = "cache"


@dataclass(frozen=True)
class StorageRoot:
    """Durable and cache base directories."""

    durable: Path
    cache: Path

    @classmethod
    def initialize(cls, config: StorageConfig) -> StorageRoot:
        """Resolve both roots from configuration and create them."""
        root = cls(
            durable=config.durable_path.resolve(),
            cache=(config.cache_path / CACHE_SUBDIRECTORY).resolve(),
        )
        root.durable_root()
        root.cache_root()
        logger.debug("Initialized storage root durable=%s cache=%s", root.durable, root.cache)
        return root

    def durable_root(self) -> Path:
        """Return the durable directory, creating it if missing."""
        ensure_directory(self.durable)
        return self.durable

    def cache_root(self) -> Path:
        """Return the cache directory, recreating it if it was purged."""
        ensure_directory(self.cache)
        return self.cache

    @staticmethod
    def resolve(base: Path, relative: PurePosixPath | str) -> Path:
        """Join a base directory with a relative path. Does not touch disk."""
        relative = PurePosixPath(relative)
        if relative.is_absolute():
            raise InvalidPathSegmentError(str(relative), "expected a relative path")
        return base.joinpath(*relative.parts)

    def resolve_durable(self, relative: PurePosixPath | str) -> Path:
        return self.resolve(self.durable, relative)

    def resolve_cache(self, relative: PurePosixPath | str) -> Path:
        return self.resolve(self.cache, relative)
