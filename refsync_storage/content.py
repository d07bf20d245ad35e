"""File identity helpers: content hashing and type sniffing."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from .exceptions import StorageIOError
from .local.file_ops import read_head

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
HASH_CHUNK_SIZE = 64 * 1024


def content_hash(
    path: Path,
    algorithm: str = "md5",
    chunk_size: int = HASH_CHUNK_SIZE,
) -> str | None:
    """Hex digest of a file's content, streamed in chunks.

    Used for identity and deduplication, not security. Returns None if the
    file cannot be read.
    """
    digest = hashlib.new(algorithm)
    try:
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as e:
        logger.warning("Unable to hash %s: %s", path, e)
        return None
    return digest.hexdigest()


def looks_like_pdf(path: Path) -> bool:
    """Check the first bytes of a file for the PDF signature.

    Short files and unreadable files are reported as not PDF.
    """
    try:
        head = read_head(path, len(PDF_MAGIC))
    except StorageIOError as e:
        logger.debug("Unable to sniff %s: %s", path, e.cause)
        return False
    return head == PDF_MAGIC
