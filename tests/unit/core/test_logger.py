"""Unit tests for the logging utility."""

from __future__ import annotations

import io
import json
import logging

from revokit.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_package_level(restore_package_logger) -> None:
    """``configure_logging`` should set the package logger level only."""
    root_level = logging.getLogger().level

    # Act
    configure_logging("DEBUG")

    # Assert
    assert restore_package_logger.level == logging.DEBUG
    assert logging.getLogger().level == root_level


def test_configure_logging_replaces_previous_handler(restore_package_logger) -> None:
    configure_logging("INFO")
    configure_logging("WARNING")

    json_handlers = [h for h in restore_package_logger.handlers if isinstance(h.formatter, JSONFormatter)]
    assert len(json_handlers) == 1


def test_sweep_log_line_is_json_with_extras(restore_package_logger) -> None:
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)

    logging.getLogger("revokit.services.revocation.service").info(
        "Revocation sweep removed %d expired record(s)", 2, extra={"removed": 2}
    )

    payload = json.loads(stream.getvalue().splitlines()[-1])
    assert payload["level"] == "INFO"
    assert payload["removed"] == 2
    assert payload["message"] == "Revocation sweep removed 2 expired record(s)"


def test_json_formatter_carries_revocation_extras() -> None:
    record = logging.LogRecord("revokit.test", logging.INFO, __file__, 1, "swept %d", (2,), None)
    record.removed = 2
    record.token_ref = "abc123"
    record.namespace = "revoked:"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "swept 2"
    assert payload["name"] == "revokit.test"
    assert payload["removed"] == 2
    assert payload["token_ref"] == "abc123"
    assert payload["namespace"] == "revoked:"
    assert "request_id" not in payload
