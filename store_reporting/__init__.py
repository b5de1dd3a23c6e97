"""
Store reporting: consolidation, listing and trend reports, export.

Pure functions live in ``aggregation`` and ``statements``; ``service`` is
the database-backed entry point.
"""

from store_reporting.aggregation import aggregate, consolidate, group_by_period
from store_reporting.config import ReportingConfig
from store_reporting.export import to_spreadsheet_xml, to_workbook, write_spreadsheet
from store_reporting.models import (
    FinancialReport,
    ReportMetadata,
    ReportTotals,
    ReportType,
    SortDirection,
    TrendPoint,
)
from store_reporting.service import ReportingService
from store_reporting.statements import (
    available_years,
    build_listing,
    build_report,
    build_trend_report,
    compute_totals,
    filter_rows,
    period_sort_key,
    render_to_dict,
    row_to_dict,
    sort_rows,
    trend_series,
)

__all__ = [
    "FinancialReport",
    "ReportMetadata",
    "ReportTotals",
    "ReportType",
    "ReportingConfig",
    "ReportingService",
    "SortDirection",
    "TrendPoint",
    "aggregate",
    "available_years",
    "build_listing",
    "build_report",
    "build_trend_report",
    "compute_totals",
    "consolidate",
    "filter_rows",
    "group_by_period",
    "period_sort_key",
    "render_to_dict",
    "row_to_dict",
    "sort_rows",
    "to_spreadsheet_xml",
    "to_workbook",
    "trend_series",
    "write_spreadsheet",
]
