"""
Pure report-building functions.

These functions turn aggregated rows into a filtered, sorted report with
grand totals.  ZERO I/O. ZERO side effects.

All monetary values are Decimal. All inputs/outputs are frozen dataclasses.

Functions in this module follow the store_kernel/domain/ purity convention:
- No database access
- No clock access
- No file I/O
- Deterministic: same inputs always produce same outputs
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from store_kernel.domain.entries import (
    CONSOLIDATED_STORE_LABEL,
    ZERO,
    AggregatedRow,
    FinancialEntry,
    ReportRow,
)
from store_reporting.aggregation import aggregate
from store_reporting.models import (
    FinancialReport,
    ReportMetadata,
    ReportTotals,
    SortDirection,
    TrendPoint,
)

# =========================================================================
# Filter / sort / totals
# =========================================================================


def filter_rows(
    rows: Iterable[ReportRow],
    year_filter: str = "",
    month_filter: str = "",
) -> tuple[ReportRow, ...]:
    """
    Keep the rows matching the year and month selections.

    An empty filter matches everything.  The year filter compares against
    the decimal string of the row's year; the month filter against the
    two-digit month code.  Input order is preserved.
    """
    return tuple(
        row for row in rows
        if (not year_filter or str(row.year) == year_filter)
        and (not month_filter or row.month == month_filter)
    )


def period_sort_key(row: ReportRow) -> tuple[int, str]:
    """The one ordering key of report rows."""
    return (row.year, row.month)


def sort_rows(
    rows: Iterable[ReportRow],
    direction: SortDirection = SortDirection.DESCENDING,
) -> tuple[ReportRow, ...]:
    """
    Stable sort by period.

    Rows sharing a period keep their relative input order in both
    directions.
    """
    return tuple(
        sorted(
            rows,
            key=period_sort_key,
            reverse=direction is SortDirection.DESCENDING,
        )
    )


def compute_totals(rows: Iterable[ReportRow]) -> ReportTotals:
    """Sum revenues and expenses over ``rows``; net is their difference."""
    revenue = ZERO
    expense = ZERO
    for row in rows:
        revenue += row.total_revenues
        expense += row.total_expenses
    return ReportTotals(revenue=revenue, expense=expense, net=revenue - expense)


# =========================================================================
# Report builders
# =========================================================================


def build_report(
    rows: Iterable[ReportRow],
    year_filter: str = "",
    month_filter: str = "",
    direction: SortDirection = SortDirection.DESCENDING,
    metadata: ReportMetadata | None = None,
) -> FinancialReport:
    """
    Filter, then sort, then total.

    Totals are computed over the filtered rows only.
    """
    filtered = filter_rows(rows, year_filter, month_filter)
    ordered = sort_rows(filtered, direction)
    return FinancialReport(
        rows=ordered,
        totals=compute_totals(ordered),
        direction=direction,
        metadata=metadata,
    )


def build_listing(
    entries: Iterable[FinancialEntry],
    store_filter: str = "",
    year_filter: str = "",
    month_filter: str = "",
    label: str = CONSOLIDATED_STORE_LABEL,
    metadata: ReportMetadata | None = None,
) -> FinancialReport:
    """Consultation listing: newest period first."""
    return build_report(
        aggregate(entries, store_filter, label),
        year_filter,
        month_filter,
        SortDirection.DESCENDING,
        metadata,
    )


def build_trend_report(
    entries: Iterable[FinancialEntry],
    store_filter: str = "",
    year_filter: str = "",
    month_filter: str = "",
    label: str = CONSOLIDATED_STORE_LABEL,
    metadata: ReportMetadata | None = None,
) -> FinancialReport:
    """Analysis report: oldest period first, as a time series."""
    return build_report(
        aggregate(entries, store_filter, label),
        year_filter,
        month_filter,
        SortDirection.ASCENDING,
        metadata,
    )


def trend_series(report: FinancialReport) -> tuple[TrendPoint, ...]:
    """Chart points of a report, in the report's row order."""
    return tuple(
        TrendPoint(
            label=row.period.short_label,
            year=row.year,
            month=row.month,
            revenue=row.total_revenues,
            expense=row.total_expenses,
            net=row.net_result,
        )
        for row in report.rows
    )


def available_years(entries: Iterable[FinancialEntry]) -> tuple[str, ...]:
    """Distinct years that have entries, newest first."""
    return tuple(str(y) for y in sorted({e.year for e in entries}, reverse=True))


# =========================================================================
# Rendering
# =========================================================================


def row_to_dict(row: ReportRow) -> dict:
    """Flatten a report row: dimensions, leaves and derived totals."""
    data: dict = {
        "id": render_to_dict(row.id),
        "store": row.store,
        "year": row.year,
        "month": row.month,
        "is_aggregated": row.is_aggregated,
    }
    data.update({name: str(value) for name, value in row.amounts.as_dict().items()})
    data["total_revenues"] = str(row.total_revenues)
    data["total_expenses"] = str(row.total_expenses)
    data["net_result"] = str(row.net_result)
    if isinstance(row, AggregatedRow):
        data["entry_count"] = row.entry_count
    return data


def render_to_dict(obj: object) -> dict | list | str | int | float | bool | None:
    """
    Convert any report dataclass to a plain dict for JSON serialization.

    Handles:
    - Decimal -> str (preserving precision)
    - UUID -> str
    - date -> ISO format string
    - Enum -> .value
    - Report rows -> flat dicts including derived totals
    - Nested frozen dataclasses -> nested dicts
    - Tuples -> lists
    - None preserved
    """
    if obj is None:
        return None
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (FinancialEntry, AggregatedRow)):
        return row_to_dict(obj)
    if isinstance(obj, (list, tuple)):
        return [render_to_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): render_to_dict(v) for k, v in obj.items()}
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: render_to_dict(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, (str, int, float, bool)):
        return obj
    return str(obj)
