"""Pure domain values: entries, periods, clock. Zero I/O."""

from store_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from store_kernel.domain.entries import (
    CONSOLIDATED_STORE_LABEL,
    CREDIT_FIELDS,
    DEBIT_FIELDS,
    LEAF_FIELDS,
    AggregatedRow,
    FinancialEntry,
    LeafAmounts,
    ReportRow,
    sum_amounts,
    to_amount,
    validate_entry,
)
from store_kernel.domain.periods import MONTH_CODES, MONTH_NAMES, Period, month_name

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "CONSOLIDATED_STORE_LABEL",
    "CREDIT_FIELDS",
    "DEBIT_FIELDS",
    "LEAF_FIELDS",
    "AggregatedRow",
    "FinancialEntry",
    "LeafAmounts",
    "ReportRow",
    "sum_amounts",
    "to_amount",
    "validate_entry",
    "MONTH_CODES",
    "MONTH_NAMES",
    "Period",
    "month_name",
]
