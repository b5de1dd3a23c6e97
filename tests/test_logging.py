"""
Tests for store_kernel/logging_config.py.

The formatter is checked on the lines the services really emit: entry
writes tagged with their store and period, and report generation with its
filters and totals.
"""

import json
import logging
import sys
from decimal import Decimal
from io import StringIO

import pytest

from store_kernel.exceptions import DuplicateEntryError, InvalidAmountError
from store_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)
from store_reporting.models import SortDirection
from store_reporting.service import ReportingService
from tests.conftest import make_entry


def _format(record: logging.LogRecord) -> dict:
    return json.loads(StructuredFormatter().format(record))


def _record(message: str, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "store_kernel.test", logging.INFO, __file__, 1, message, (), exc_info
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestEntryEvents:

    def test_saved_line_carries_store_period_and_amounts(self, entry_service, captured_logs):
        entry_id = entry_service.save(
            make_entry("Loja Centro", 2024, "03", credit_caixa="150.00", debit_caixa="20.50")
        )
        line = next(r for r in captured_logs() if r["message"] == "financial_entry_saved")
        assert line["logger"] == "store_kernel.services.entry"
        assert line["store"] == "Loja Centro"
        assert line["period"] == "2024-03"
        assert line["entry_id"] == str(entry_id)
        assert line["total_revenues"] == "150.00"
        assert line["net_result"] == "129.50"

    def test_context_released_after_write(self, entry_service, captured_logs):
        entry_service.save(make_entry("Loja Centro", 2024, "03"))
        get_logger("test").info("after_write")
        line = next(r for r in captured_logs() if r["message"] == "after_write")
        assert "store" not in line
        assert "period" not in line

    def test_updated_line_lists_changed_leaves(self, entry_service, entry_selector, captured_logs):
        entry_id = entry_service.save(make_entry("Loja Norte", 2024, "04", credit_ifood="5.00"))
        entry = entry_selector.get(entry_id)
        entry_service.update(entry.with_amounts(credit_ifood="7.00"))
        line = next(r for r in captured_logs() if r["message"] == "financial_entry_updated")
        assert line["store"] == "Loja Norte"
        assert line["changed_leaves"] == ["credit_ifood"]


class TestReportEvents:

    def test_report_generated_line(self, session, deterministic_clock, entry_service, captured_logs):
        entry_service.save(make_entry("Loja Centro", 2024, "01", credit_caixa="10.00"))
        entry_service.save(make_entry("Loja Norte", 2024, "01", debit_caixa="2.50"))
        ReportingService(session, clock=deterministic_clock).trend(year="2024")

        line = next(r for r in captured_logs() if r["message"] == "financial_report_generated")
        assert line["logger"].startswith("store_kernel.reporting")
        assert line["report_type"] == "trend"
        assert line["direction"] == SortDirection.ASCENDING.value
        assert line["year_filter"] == "2024"
        assert line["row_count"] == 1
        assert line["net_result"] == "7.50"


class TestStructuredFormatter:

    def test_envelope(self):
        line = _format(_record("financial_entry_deleted"))
        assert line["level"] == "INFO"
        assert line["logger"] == "store_kernel.test"
        assert line["message"] == "financial_entry_deleted"
        assert line["ts"].endswith("+00:00")

    def test_amounts_and_enums_serialized(self):
        line = _format(
            _record(
                "financial_report_generated",
                net_result=Decimal("-3.10"),
                direction=SortDirection.DESCENDING,
                changed_leaves=("credit_caixa",),
            )
        )
        assert line["net_result"] == "-3.10"
        assert line["direction"] == "descending"
        assert line["changed_leaves"] == ["credit_caixa"]

    def test_store_finance_error_fields(self):
        try:
            raise DuplicateEntryError("Loja A", 2024, "01")
        except DuplicateEntryError:
            line = _format(_record("save_failed", exc_info=sys.exc_info()))
        assert line["error"]["type"] == "DuplicateEntryError"
        assert line["error"]["code"] == "DUPLICATE_ENTRY"
        assert (line["error"]["store"], line["error"]["year"], line["error"]["month"]) == (
            "Loja A", 2024, "01",
        )
        assert "Traceback" in line["traceback"]

    def test_invalid_amount_value_kept_as_text(self):
        try:
            raise InvalidAmountError("credit_caixa", Decimal("1.001"))
        except InvalidAmountError:
            line = _format(_record("save_failed", exc_info=sys.exc_info()))
        assert line["error"]["field"] == "credit_caixa"
        assert line["error"]["value"] == "1.001"

    def test_plain_exception_has_no_code(self):
        try:
            raise ValueError("boom")
        except ValueError:
            line = _format(_record("failed", exc_info=sys.exc_info()))
        assert line["error"]["code"] is None
        assert line["error"]["message"] == "boom"


class TestLogContext:

    def test_bind_nests_and_restores(self):
        with LogContext.bind(store="Loja A", period="2024-01"):
            with LogContext.bind(period="2024-02"):
                assert LogContext.get_all() == {"store": "Loja A", "period": "2024-02"}
            assert LogContext.get_all()["period"] == "2024-01"
        assert LogContext.get_all() == {}

    def test_restored_when_write_fails(self):
        with pytest.raises(DuplicateEntryError):
            with LogContext.bind(store="Loja A"):
                raise DuplicateEntryError("Loja A", 2024, "01")
        assert LogContext.get_all() == {}


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def _fresh_logging(self):
        reset_logging()
        yield
        reset_logging()
        configure_logging(level=logging.DEBUG)

    def test_second_call_keeps_first_handler(self):
        first = logging.StreamHandler(StringIO())
        configure_logging(handler=first)
        configure_logging(handler=logging.StreamHandler(StringIO()))
        assert logging.getLogger("store_kernel").handlers == [first]

    def test_debug_dropped_at_default_level(self):
        stream = StringIO()
        configure_logging(stream=stream)
        get_logger("reporting.aggregation").debug("entries_aggregated")
        get_logger("reporting.service").info("financial_report_generated")
        lines = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert [line["message"] for line in lines] == ["financial_report_generated"]
