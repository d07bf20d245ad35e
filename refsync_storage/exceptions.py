"""
Custom exceptions for file storage.

Low-level helpers raise these; the FileStore facade catches the
recoverable ones and degrades to "absent" results, so callers only
ever see InvalidPathSegmentError for inputs that cannot name a file.
"""


class FileStoreError(Exception):
    """Base exception for all file storage errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class BlobNotFoundError(FileStoreError):
    """Raised when a named blob does not exist under the durable root."""

    def __init__(self, name: str, path: str | None = None):
        details = {"name": name}
        if path:
            details["path"] = path
        super().__init__(f"Blob not found: {name}", details)
        self.name = name
        self.path = path


class DeserializationError(FileStoreError):
    """Raised when stored text is not valid JSON or has the wrong shape."""

    def __init__(self, reason: str, expected: str | None = None, cause: Exception | None = None):
        details = {"reason": reason}
        if expected:
            details["expected"] = expected
        if cause:
            details["cause"] = str(cause)
        message = f"Deserialization failed: {reason}"
        if expected:
            message += f" (expected {expected})"
        super().__init__(message, details)
        self.reason = reason
        self.expected = expected
        self.cause = cause


class StorageIOError(FileStoreError):
    """Raised when a storage I/O operation fails."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Storage I/O error during {operation}"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class DirectoryCreationError(StorageIOError):
    """Raised when a directory chain cannot be created."""

    def __init__(self, path: str, cause: Exception | None = None):
        super().__init__("create_directory", path, cause)


class InvalidPathSegmentError(FileStoreError, ValueError):
    """Raised when a path component cannot be turned into a safe segment."""

    def __init__(self, segment: str, reason: str):
        super().__init__(
            f"Invalid path segment {segment!r}: {reason}",
            {"segment": segment, "reason": reason},
        )
        self.segment = segment
        self.reason = reason
