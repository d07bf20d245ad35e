"""Tests for structured logging helpers."""

import io
import json
import logging

import pytest

from refsync_storage import FileStore, StorageIOError
from refsync_storage.logging_utils import (
    StorageLoggerAdapter,
    StructuredJsonFormatter,
    configure_structured_logging,
    get_storage_logger,
    storage_error_fields,
)


@pytest.fixture
def restore_package_logger():
    """Put the package logger back as it was."""
    logger = logging.getLogger("refsync_storage")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestStructuredJsonFormatter:
    """Tests for StructuredJsonFormatter."""

    def test_single_line_json(self):
        """Records become one JSON object with extras as fields."""
        record = logging.LogRecord(
            "refsync_storage.test", logging.WARNING, __file__, 1, "hello %s", ("x",), None
        )
        record.blob = "uploads"

        output = StructuredJsonFormatter().format(record)
        parsed = json.loads(output)

        assert "\n" not in output
        assert parsed["level"] == "WARNING"
        assert parsed["logger"] == "refsync_storage.test"
        assert parsed["message"] == "hello x"
        assert parsed["blob"] == "uploads"
        assert "timestamp" in parsed

    def test_non_serializable_extra_stringified(self):
        """Extras without a JSON form are stringified."""
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "m", (), None)
        record.path = object()

        parsed = json.loads(StructuredJsonFormatter().format(record))
        assert isinstance(parsed["path"], str)

    def test_storage_error_fields(self):
        """An attached FileStoreError contributes its type and details."""
        error = StorageIOError("write_text", "/data/uploads", OSError("disk full"))
        record = logging.LogRecord(
            "refsync_storage.file_store", logging.ERROR, __file__, 1, "failed", (),
            (type(error), error, None),
        )

        parsed = json.loads(StructuredJsonFormatter().format(record))

        assert parsed["error_type"] == "StorageIOError"
        assert parsed["operation"] == "write_text"
        assert parsed["path"] == "/data/uploads"
        assert parsed["cause"] == "disk full"
        assert "StorageIOError" in parsed["exception"]

    def test_other_exceptions_add_no_error_fields(self):
        """Exceptions from outside the package only add the traceback."""
        error = ValueError("boom")
        record = logging.LogRecord(
            "t", logging.ERROR, __file__, 1, "failed", (), (type(error), error, None)
        )

        parsed = json.loads(StructuredJsonFormatter().format(record))

        assert "exception" in parsed
        assert "error_type" not in parsed
        assert storage_error_fields(None) == {}


class TestConfigureStructuredLogging:
    """Tests for configure_structured_logging."""

    def test_emits_json_with_adapter_context(self, restore_package_logger):
        """Adapter context reaches the JSON output."""
        stream = io.StringIO()
        configure_structured_logging(logging.INFO, stream=stream)

        adapter = StorageLoggerAdapter(get_storage_logger("file_store"), {"blob": "uploads"})
        adapter.info("saved")

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["logger"] == "refsync_storage.file_store"
        assert parsed["message"] == "saved"
        assert parsed["blob"] == "uploads"

    def test_replaces_existing_handlers(self, restore_package_logger):
        """Configuring twice leaves one handler."""
        configure_structured_logging(stream=io.StringIO())
        configure_structured_logging(stream=io.StringIO())
        assert len(restore_package_logger.handlers) == 1

    def test_failed_write_record(self, restore_package_logger, file_store: FileStore):
        """A failed blob write logs one JSON line naming the blob and operation."""
        stream = io.StringIO()
        configure_structured_logging(logging.INFO, stream=stream)
        file_store.path_for_filename("uploads").mkdir()

        file_store.save_object(["a"], "uploads")

        parsed = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert parsed["level"] == "ERROR"
        assert parsed["blob"] == "uploads"
        assert parsed["error_type"] == "StorageIOError"
        assert parsed["operation"] == "write_text"


def test_get_storage_logger_namespace():
    """Component loggers live under refsync_storage."""
    assert get_storage_logger("state").name == "refsync_storage.state"
