"""Tests for structured log fields, redaction and call logging."""

import logging
import uuid

import pytest

from project_finance.utils.logging_utils import (
    REDACTED,
    LogContext,
    batch_context,
    log_calls,
    project_context,
    redact,
)

logger = logging.getLogger("project_finance.tests")


class TestProjectContext:
    """Test context fields on JSON records."""

    def test_fields_attached_inside_block(self, json_records):
        with project_context("proj-001", "reconcile_ledger"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = json_records()
        assert inside["project_id"] == "proj-001"
        assert inside["operation"] == "reconcile_ledger"
        assert "project_id" not in outside
        assert "operation" not in outside

    def test_extra_fields(self, json_records):
        with project_context("proj-001", "import_labor_days", year="2024"):
            logger.info("importing")

        assert json_records()[0]["year"] == "2024"

    def test_nested_contexts_restore_outer_fields(self, json_records):
        with batch_context("reconcile_all"):
            with project_context("proj-001", "reconcile_ledger"):
                logger.info("inner")
            logger.info("outer")

        inner, outer = json_records()
        assert inner["operation"] == "reconcile_ledger"
        assert inner["correlation_id"] == outer["correlation_id"]
        assert outer["operation"] == "reconcile_all"
        assert "project_id" not in outer

    def test_fields_cleared_after_exception(self, json_records):
        with pytest.raises(RuntimeError):
            with LogContext(project_id="proj-001"):
                raise RuntimeError("boom")
        logger.info("after")

        assert "project_id" not in json_records()[0]


class TestBatchContext:
    """Test correlation ids."""

    def test_correlation_id_is_uuid(self, json_records):
        with batch_context("reconcile_all"):
            logger.info("batch")

        record = json_records()[0]
        assert str(uuid.UUID(record["correlation_id"])) == record["correlation_id"]

    def test_each_batch_gets_new_id(self):
        first = batch_context("reconcile_all")
        second = batch_context("reconcile_all")

        assert first.fields["correlation_id"] != second.fields["correlation_id"]


class TestRedact:
    """Test credential redaction."""

    def test_api_key_header(self):
        assert redact({"x-api-key": "abc", "year": "2024"}) == {
            "x-api-key": REDACTED,
            "year": "2024",
        }

    def test_authorization_is_case_insensitive(self):
        assert redact({"Authorization": "Bearer abc"})["Authorization"] == REDACTED

    def test_nested_mapping(self):
        cleaned = redact({"credentials": {"private_key": "-----BEGIN", "type": "sa"}})

        assert cleaned["credentials"] == {"private_key": REDACTED, "type": "sa"}

    def test_missing_secret_stays_none(self):
        assert redact({"import_api_key": None}) == {"import_api_key": None}

    def test_input_not_modified(self):
        headers = {"x-api-key": "abc"}

        redact(headers)

        assert headers == {"x-api-key": "abc"}


class Table:
    @log_calls()
    def build(self, project_id, year=None):
        return f"{project_id}/{year}"

    @log_calls(level=logging.INFO)
    def fail(self, project_id):
        raise ValueError(f"bad project {project_id}")


class TestLogCalls:
    """Test the call-logging decorator."""

    def test_logs_arguments_and_duration(self, caplog):
        with caplog.at_level(logging.DEBUG):
            result = Table().build("proj-001", year="2024")

        assert result == "proj-001/2024"
        message = caplog.records[-1].getMessage()
        assert message.startswith("build('proj-001', year='2024') finished in")
        assert message.endswith(" ms")
        assert caplog.records[-1].levelno == logging.DEBUG

    def test_failure_logged_and_reraised(self, caplog):
        with pytest.raises(ValueError, match="bad project proj-009"):
            Table().fail("proj-009")

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.getMessage() == "fail('proj-009') failed"
        assert record.exc_info is not None

    def test_preserves_function_name(self):
        assert Table.build.__name__ == "build"
