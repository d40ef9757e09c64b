"""Unit tests for observability logging."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from searchbase.observability.logging import (
    DEFAULT_SENSITIVE_FIELDS,
    JsonLoggerFactory,
    Logger,
    SensitiveFieldsFilter,
    get_logger,
)


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# SensitiveFieldsFilter
# ---------------------------------------------------------------------------


class TestSensitiveFieldsFilter:
    def test_redacts_known_sensitive_key(self) -> None:
        f = SensitiveFieldsFilter()
        result = f.redact({"password": "s3cr3t", "name": "alice"})
        assert result["password"] == SensitiveFieldsFilter.REDACTED
        assert result["name"] == "alice"

    def test_redacts_all_default_sensitive_fields(self) -> None:
        f = SensitiveFieldsFilter()
        result = f.redact({field: "value" for field in DEFAULT_SENSITIVE_FIELDS})
        assert set(result.values()) == {SensitiveFieldsFilter.REDACTED}

    def test_header_names_match_case_insensitively(self) -> None:
        result = SensitiveFieldsFilter().redact({"Authorization": "Basic dTpw", "Accept": "application/json"})
        assert result == {"Authorization": "[REDACTED]", "Accept": "application/json"}

    def test_custom_fields_replace_defaults(self) -> None:
        f = SensitiveFieldsFilter(frozenset({"x-api-secret"}))
        result = f.redact({"X-Api-Secret": "k", "password": "p"})
        assert result == {"X-Api-Secret": "[REDACTED]", "password": "p"}

    def test_redact_deep(self) -> None:
        data = {"request": {"headers": {"authorization": "Basic x", "accept": "*/*"}}, "index": "books"}
        result = SensitiveFieldsFilter().redact_deep(data)
        assert result["request"]["headers"]["authorization"] == "[REDACTED]"
        assert result["request"]["headers"]["accept"] == "*/*"
        assert result["index"] == "books"

    def test_input_untouched(self) -> None:
        data = {"token": "abc"}
        SensitiveFieldsFilter().redact(data)
        assert data == {"token": "abc"}


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_satisfies_logger_protocol(self) -> None:
        logger: Logger = get_logger(__name__)
        for method in ("debug", "info", "warning", "error"):
            assert callable(getattr(logger, method))

    def test_binds_initial_values(self) -> None:
        with capture_logs() as logs:
            get_logger(__name__, index="books").info("searchbase.ping", value="dune")
        assert logs == [{"event": "searchbase.ping", "index": "books", "value": "dune", "log_level": "info"}]


# ---------------------------------------------------------------------------
# JsonLoggerFactory
# ---------------------------------------------------------------------------


class TestJsonLoggerFactory:
    def _lines(self, captured: str) -> list[dict[str, Any]]:
        return [json.loads(line) for line in captured.splitlines() if line.strip()]

    def test_renders_json_with_redaction(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure("debug")
        get_logger("searchbase.tests").info(
            "searchbase.request", headers={"Authorization": "Basic dTpw"}, credentials="u:p"
        )
        (line,) = self._lines(capsys.readouterr().err)
        assert line["event"] == "searchbase.request"
        assert line["level"] == "info"
        assert line["logger"] == "searchbase.tests"
        assert line["headers"] == {"Authorization": "[REDACTED]"}
        assert line["credentials"] == "[REDACTED]"
        assert "timestamp" in line

    def test_level_filters_records(self, restore_logging: None, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.WARNING)
        logger = get_logger("searchbase.tests.level")
        logger.debug("searchbase.hidden")
        logger.warning("searchbase.shown")
        events = [line["event"] for line in self._lines(capsys.readouterr().err)]
        assert events == ["searchbase.shown"]

    def test_replaces_root_handlers(self, restore_logging: None) -> None:
        JsonLoggerFactory.configure()
        JsonLoggerFactory.configure()
        assert len(logging.getLogger().handlers) == 1
