"""
Reporting Service (``store_reporting.service``).

Responsibility
--------------
Orchestrates report generation -- the consultation listing, the trend
analysis, the year selector and the spreadsheet export -- by bridging the
kernel ``EntrySelector`` to the pure functions in ``aggregation.py`` and
``statements.py``.  This is a **read-only** service: entries are never
written here.

Architecture position
---------------------
**Reporting layer** -- thin glue.  Constructor: ``session`` + ``clock`` +
``config``.

Invariants enforced
-------------------
* Read-only -- no mutations to the entry store.
* All monetary amounts use ``Decimal`` -- NEVER ``float``.
* Report metadata carries the generation timestamp and the filter selection.

Failure modes
-------------
* Selector query failure  -> exception propagates (read-only, nothing to
  roll back).
* Export of an empty selection  -> ``EmptyExportError``.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.orm import Session

from store_kernel.domain.clock import Clock, SystemClock
from store_kernel.logging_config import get_logger
from store_kernel.selectors.entry_selector import EntrySelector
from store_reporting.config import ReportingConfig
from store_reporting.export import write_spreadsheet
from store_reporting.models import (
    FinancialReport,
    ReportMetadata,
    ReportType,
    TrendPoint,
)
from store_reporting.statements import (
    available_years,
    build_listing,
    build_trend_report,
    render_to_dict,
    trend_series,
)

logger = get_logger("reporting.service")


class ReportingService:
    """
    Financial report generation service.

    Contract
    --------
    * Every report method returns a ``FinancialReport`` with metadata.
    * All methods are read-only.

    Non-goals
    ---------
    * Does NOT validate or persist entries (see ``EntryService``).
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        config: ReportingConfig | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._config = config or ReportingConfig.with_defaults()
        self._entries = EntrySelector(session)

        logger.info(
            "reporting_service_initialized",
            extra={
                "entity_name": self._config.entity_name,
                "currency": self._config.currency,
            },
        )

    @property
    def config(self) -> ReportingConfig:
        return self._config

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _make_metadata(
        self,
        report_type: ReportType,
        store: str,
        year: str,
        month: str,
    ) -> ReportMetadata:
        return ReportMetadata(
            report_type=report_type,
            entity_name=self._config.entity_name,
            currency=self._config.currency,
            generated_at=self._clock.now().isoformat(),
            store_filter=store,
            year_filter=year,
            month_filter=month,
        )

    def _log_generated(self, report: FinancialReport) -> None:
        meta = report.metadata
        logger.info(
            "financial_report_generated",
            extra={
                "report_type": meta.report_type.value if meta else None,
                "store_filter": meta.store_filter if meta else "",
                "year_filter": meta.year_filter if meta else "",
                "month_filter": meta.month_filter if meta else "",
                "direction": report.direction.value,
                "row_count": len(report.rows),
                "total_revenue": str(report.totals.revenue),
                "total_expense": str(report.totals.expense),
                "net_result": str(report.totals.net),
            },
        )

    # =========================================================================
    # Reports
    # =========================================================================

    def listing(
        self,
        store: str = "",
        year: str = "",
        month: str = "",
    ) -> FinancialReport:
        """
        Consultation listing, newest period first.

        Args:
            store: Store name, or "" for every store consolidated per period.
            year: Year as a string (e.g. "2024"), or "" for all years.
            month: Two-digit month code, or "" for all months.
        """
        report = build_listing(
            self._entries.list_entries(store or None),
            store_filter=store,
            year_filter=year,
            month_filter=month,
            label=self._config.consolidated_label,
            metadata=self._make_metadata(ReportType.LISTING, store, year, month),
        )
        self._log_generated(report)
        return report

    def trend(
        self,
        store: str = "",
        year: str = "",
        month: str = "",
    ) -> FinancialReport:
        """Analysis report, oldest period first (same filters as listing)."""
        report = build_trend_report(
            self._entries.list_entries(store or None),
            store_filter=store,
            year_filter=year,
            month_filter=month,
            label=self._config.consolidated_label,
            metadata=self._make_metadata(ReportType.TREND, store, year, month),
        )
        self._log_generated(report)
        return report

    def trend_points(
        self,
        store: str = "",
        year: str = "",
        month: str = "",
    ) -> tuple[TrendPoint, ...]:
        """Chart series of the trend report."""
        return trend_series(self.trend(store, year, month))

    def available_years(self) -> tuple[str, ...]:
        """Years that have entries in any store, newest first."""
        return available_years(self._entries.list_entries())

    def stores(self) -> list[str]:
        """
        Store names for a store picker.

        Configured stores come first in their configured order, followed by
        any other store found in the entry store.
        """
        configured = list(self._config.stores)
        seen = set(configured)
        return configured + [
            s for s in self._entries.distinct_stores() if s not in seen
        ]

    def export(self, report: FinancialReport, path: str | Path) -> Path:
        """Write a report's rows as SpreadsheetML."""
        return write_spreadsheet(report, path, sheet_name=self._config.sheet_name)

    # =========================================================================
    # Rendering
    # =========================================================================

    @staticmethod
    def to_dict(report: object) -> dict | list | str | int | float | bool | None:
        """Convert any report to a plain dict for JSON serialization."""
        return render_to_dict(report)
