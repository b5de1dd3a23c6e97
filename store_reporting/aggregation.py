"""
Aggregator -- per-store pass-through or all-stores consolidation.

Pure functions: no I/O, no database, no clock.

With no store filter, entries are partitioned by period and each partition
collapses into one ``AggregatedRow`` whose leaves are the field-wise sum of
its members (``sum_amounts``).  With a store filter, that store's entries
are returned unchanged.  Either way the output is in ascending period order;
report ordering is applied later by ``statements.sort_rows``.
"""

from __future__ import annotations

from collections.abc import Iterable

from store_kernel.domain.entries import (
    CONSOLIDATED_STORE_LABEL,
    AggregatedRow,
    FinancialEntry,
    ReportRow,
    sum_amounts,
)
from store_kernel.domain.periods import Period
from store_kernel.logging_config import get_logger

logger = get_logger("reporting.aggregation")


def group_by_period(
    entries: Iterable[FinancialEntry],
) -> dict[Period, tuple[FinancialEntry, ...]]:
    """
    Partition entries by (year, month).

    Keys are in ascending period order; entries keep their input order
    within a partition.
    """
    buckets: dict[Period, list[FinancialEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.period, []).append(entry)
    return {period: tuple(buckets[period]) for period in sorted(buckets)}


def consolidate(
    period: Period,
    entries: Iterable[FinancialEntry],
    label: str = CONSOLIDATED_STORE_LABEL,
) -> AggregatedRow:
    """Collapse the entries of one period into an aggregated row."""
    members = tuple(entries)
    return AggregatedRow(
        year=period.year,
        month=period.month,
        amounts=sum_amounts(e.amounts for e in members),
        entry_count=len(members),
        store=label,
    )


def aggregate(
    entries: Iterable[FinancialEntry],
    store_filter: str = "",
    label: str = CONSOLIDATED_STORE_LABEL,
) -> tuple[ReportRow, ...]:
    """
    Build the rows of a listing for one store or for all stores.

    Args:
        entries: Raw entries of any stores, in any order.
        store_filter: Store name, or "" for the consolidated view.
        label: Store label given to consolidated rows.

    Returns:
        Rows in ascending period order.  One AggregatedRow per period that
        has at least one entry when ``store_filter`` is empty, otherwise the
        matching entries unchanged.
    """
    entries = tuple(entries)

    if store_filter:
        rows: tuple[ReportRow, ...] = tuple(
            sorted(
                (e for e in entries if e.store == store_filter),
                key=lambda e: (e.year, e.month),
            )
        )
    else:
        rows = tuple(
            consolidate(period, members, label)
            for period, members in group_by_period(entries).items()
        )

    logger.debug(
        "entries_aggregated",
        extra={
            "store_filter": store_filter,
            "input_count": len(entries),
            "row_count": len(rows),
        },
    )
    return rows
