"""
Store Reporting Domain Models (``store_reporting.models``).

Responsibility
--------------
Frozen dataclass value objects returned by the report builder: the report
itself (rows + totals), its metadata, and the chart series of the trend
view.

Architecture position
---------------------
**Reporting layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields are ``Decimal`` -- NEVER ``float``.
* ``ReportTotals.net`` is always ``revenue - expense``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from store_kernel.domain.entries import ReportRow


class SortDirection(str, Enum):
    """Period ordering of report rows."""

    DESCENDING = "descending"  # newest first: consultation listing
    ASCENDING = "ascending"  # oldest first: trend chart


class ReportType(str, Enum):
    """Kinds of financial report."""

    LISTING = "listing"
    TREND = "trend"


@dataclass(frozen=True)
class ReportMetadata:
    """Metadata attached to a generated report."""

    report_type: ReportType
    entity_name: str
    currency: str
    generated_at: str  # ISO timestamp from injected clock
    store_filter: str = ""
    year_filter: str = ""
    month_filter: str = ""


@dataclass(frozen=True)
class ReportTotals:
    """Report-wide totals over the filtered rows."""

    revenue: Decimal
    expense: Decimal
    net: Decimal


@dataclass(frozen=True)
class FinancialReport:
    """Filtered, sorted rows plus their grand totals."""

    rows: tuple[ReportRow, ...]
    totals: ReportTotals
    direction: SortDirection
    metadata: ReportMetadata | None = None

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def is_consolidated(self) -> bool:
        """True when the rows are all-stores aggregates."""
        return any(row.is_aggregated for row in self.rows)


@dataclass(frozen=True)
class TrendPoint:
    """One bar group of the revenue/expense chart."""

    label: str  # e.g. "Jan/2024"
    year: int
    month: str
    revenue: Decimal
    expense: Decimal
    net: Decimal
