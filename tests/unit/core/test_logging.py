"""Unit tests for the contextual logger and its formatters.

Tests:
- ContextualLogger prefixes and dimensions on emitted records
- with_context / with_prefix return new adapters
- configure_logging handler setup (opt-in, no duplicate records)
- ContextFormatter and JSONFormatter rendering
"""

import json
import logging

import pytest

from linkedin_auth.core.logging import (
    LOGGER_NAME,
    ContextFormatter,
    ContextualLogger,
    JSONFormatter,
    configure_logging,
    logger,
)


def _record(msg: str = "hello", **dimensions) -> logging.LogRecord:
    record = logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, msg, None, None)
    if dimensions:
        record.dimensions = dimensions
    return record


class TestContextualLogger:
    """Tests for ContextualLogger."""

    def test_records_carry_prefix_and_dimensions(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        log = logger.with_prefix("LinkedIn: ").with_context(request_id="req-1")

        log.info("Requesting request token")

        (record,) = [r for r in caplog.records if r.name == LOGGER_NAME]
        assert record.getMessage() == "LinkedIn: Requesting request token"
        assert record.dimensions == {"request_id": "req-1"}

    def test_call_extra_dimensions_are_merged(self, caplog):
        caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
        log = logger.with_context(strategy="linkedin")

        log.debug("msg", extra={"dimensions": {"step": "callback"}})

        (record,) = [r for r in caplog.records if r.name == LOGGER_NAME]
        assert record.dimensions == {"strategy": "linkedin", "step": "callback"}

    def test_with_context_does_not_mutate_receiver(self):
        base = logger.with_context(request_id="req-1")
        narrowed = base.with_context(strategy="linkedin")

        assert base.dimensions == {"request_id": "req-1"}
        assert narrowed.dimensions == {"request_id": "req-1", "strategy": "linkedin"}
        assert narrowed is not base

    def test_prefixes_stack(self):
        log = ContextualLogger(logging.getLogger(LOGGER_NAME)).with_prefix("A: ").with_prefix("B: ")

        msg, _ = log.process("hi", {})

        assert msg == "A: B: hi"

    def test_prefix_keeps_dimensions(self):
        log = logger.with_context(request_id="req-1").with_prefix("LinkedIn: ")

        assert log.dimensions == {"request_id": "req-1"}


class TestFormatters:
    """Tests for the text and JSON formatters."""

    def test_context_formatter_appends_sorted_dimensions(self):
        formatter = ContextFormatter("%(levelname)s %(message)s")

        line = formatter.format(_record(strategy="linkedin", request_id="req-1"))

        assert line == "INFO hello [request_id=req-1 strategy=linkedin]"

    def test_context_formatter_without_dimensions(self):
        formatter = ContextFormatter("%(levelname)s %(message)s")

        assert formatter.format(_record()) == "INFO hello"

    def test_json_formatter(self):
        payload = json.loads(JSONFormatter().format(_record(request_id="req-1")))

        assert payload["level"] == "INFO"
        assert payload["logger"] == LOGGER_NAME
        assert payload["message"] == "hello"
        assert payload["request_id"] == "req-1"


@pytest.fixture
def package_logger():
    """The package logger, restored to its import-time state afterwards."""
    base = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(base.handlers), base.level, base.propagate
    yield base
    base.handlers[:] = handlers
    base.setLevel(level)
    base.propagate = propagate


class TestConfigureLogging:
    """Tests for handler setup."""

    def test_import_installs_only_a_null_handler(self, package_logger):
        assert package_logger.propagate is True
        assert package_logger.handlers
        assert all(isinstance(h, logging.NullHandler) for h in package_logger.handlers)

    @pytest.mark.parametrize("level", ["WARNING", "DEBUG"])
    def test_sets_level(self, package_logger, level: str):
        configure_logging(level=level)

        assert package_logger.level == getattr(logging, level)

    @pytest.mark.parametrize(
        "json_output, formatter_type",
        [(False, ContextFormatter), (True, JSONFormatter)],
        ids=["text", "json"],
    )
    def test_installs_one_stdout_handler(self, package_logger, json_output, formatter_type):
        configure_logging(json_output=json_output)
        configure_logging(json_output=json_output)

        streams = [h for h in package_logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(streams) == 1
        assert isinstance(streams[0].formatter, formatter_type)

    def test_records_are_not_duplicated_through_root(self, package_logger, caplog):
        configure_logging(level="INFO")

        logger.info("only once")

        assert package_logger.propagate is False
        assert [r for r in caplog.records if r.name == LOGGER_NAME] == []
