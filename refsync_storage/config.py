"""
Storage configuration.

Configuration can be provided directly, via environment variables, or via
the ``storage`` section of a YAML settings file:

```yaml
storage:
  user_id: 12345
  data_dir: "/var/lib/refsync"
  cache_dir: "/var/cache/refsync"
  db_extension: "db"
```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import yaml

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "refsync"
DEFAULT_DB_EXTENSION = "db"


@dataclass
class StorageConfig:
    """Configuration for the file store.

    Environment Variables:
        REFSYNC_USER_ID: Active user id, used to name the main database file
        REFSYNC_DATA_DIR: Durable root directory
        REFSYNC_CACHE_DIR: Platform cache area (the store uses a ``cache/``
            subdirectory inside it)
        REFSYNC_DB_EXTENSION: Extension for database file names

    Attributes:
        user_id: The active user id
        data_dir: Durable root (default: platform user data dir)
        cache_dir: Platform cache area (default: platform user cache dir)
        app_name: Application name used for platform default directories
        db_extension: Extension for ``maindb_<user>`` and ``translators`` files
        options: Additional options
    """

    user_id: int | str = 0
    data_dir: str | None = None
    cache_dir: str | None = None
    app_name: str = DEFAULT_APP_NAME
    db_extension: str = DEFAULT_DB_EXTENSION
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def durable_path(self) -> Path:
        """Directory holding everything the user's data needs."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return Path(platformdirs.user_data_dir(self.app_name))

    @property
    def cache_path(self) -> Path:
        """Platform cache area the purgeable ``cache/`` directory lives in."""
        if self.cache_dir:
            return Path(self.cache_dir).expanduser()
        return Path(platformdirs.user_cache_dir(self.app_name))

    @classmethod
    def from_environment(cls, user_id: int | str | None = None) -> StorageConfig:
        """Create configuration from environment variables.

        Args:
            user_id: Overrides REFSYNC_USER_ID when given

        Returns:
            StorageConfig populated from environment variables
        """
        if user_id is None:
            user_id = os.environ.get("REFSYNC_USER_ID", 0)

        return cls(
            user_id=user_id,
            data_dir=os.environ.get("REFSYNC_DATA_DIR"),
            cache_dir=os.environ.get("REFSYNC_CACHE_DIR"),
            db_extension=os.environ.get("REFSYNC_DB_EXTENSION", DEFAULT_DB_EXTENSION),
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> StorageConfig:
        """Create configuration from the ``storage`` section of a YAML file.

        A missing or unreadable file yields the defaults.
        """
        section = _load_storage_section(Path(path))

        known = {"user_id", "data_dir", "cache_dir", "app_name", "db_extension"}
        kwargs: dict[str, Any] = {k: v for k, v in section.items() if k in known}
        options = {k: v for k, v in section.items() if k not in known}

        return cls(**kwargs, options=options)


def _load_storage_section(path: Path) -> dict[str, Any]:
    """Load the ``storage`` mapping from a YAML settings file."""
    if not path.exists():
        return {}

    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read settings file %s: %s", path, e)
        return {}

    section = content.get("storage", {}) if isinstance(content, dict) else {}
    if not isinstance(section, dict):
        logger.warning("Ignoring non-mapping storage section in %s", path)
        return {}
    return section
