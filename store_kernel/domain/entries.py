"""
Financial entry value objects.

Responsibility:
    Immutable representation of one store's monthly credits and debits
    (``FinancialEntry``) and of the consolidated all-stores row for one
    period (``AggregatedRow``).

Invariants enforced:
    - The nine leaf amounts live in ``LeafAmounts``; ``total_revenues``,
      ``total_expenses`` and ``net_result`` are read-only properties computed
      from them on every access.  There is no way to set a derived total.
    - ``LeafAmounts.__add__`` is the only summation of leaves in the system.
      Consolidation and report totals both go through it (``sum_amounts``).
    - All amounts are ``Decimal``.  Floats are converted through ``str`` so
      that ``0.1`` becomes ``Decimal("0.1")``, never a binary approximation.

Pure module: no I/O, no database, no clock.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from functools import reduce
from typing import ClassVar, Union
from uuid import UUID

from store_kernel.domain.periods import Period, is_month_code
from store_kernel.exceptions import (
    InvalidAmountError,
    InvalidMonthError,
    InvalidYearError,
    MissingStoreError,
)

ZERO = Decimal("0")
CENT = Decimal("0.01")
# Integer digits the money column holds (Numeric(14, 2)).
AMOUNT_INTEGER_DIGITS = 12
AMOUNT_LIMIT = Decimal(10) ** AMOUNT_INTEGER_DIGITS

CREDIT_FIELDS: tuple[str, ...] = (
    "credit_caixa",
    "credit_delta",
    "credit_pagbank_debit",
    "credit_pagbank_credit",
    "credit_ifood",
)
DEBIT_FIELDS: tuple[str, ...] = (
    "debit_caixa",
    "debit_pagbank_debit",
    "debit_pagbank_credit",
    "debit_loteria",
)
LEAF_FIELDS: tuple[str, ...] = CREDIT_FIELDS + DEBIT_FIELDS

CONSOLIDATED_STORE_LABEL = "Todas as Lojas (Consolidado)"


def to_amount(value: object, field_name: str = "amount") -> Decimal:
    """
    Convert an int, str, float or Decimal into a Decimal amount.

    Raises:
        InvalidAmountError: value is not numeric or not finite.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(field_name, value)
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(field_name, value) from None
    else:
        raise InvalidAmountError(field_name, value)
    if not amount.is_finite():
        raise InvalidAmountError(field_name, value)
    return amount


@dataclass(frozen=True)
class LeafAmounts:
    """The nine signed leaf amounts of an entry, plus derived totals."""

    # Credits (revenues)
    credit_caixa: Decimal = ZERO
    credit_delta: Decimal = ZERO
    credit_pagbank_debit: Decimal = ZERO
    credit_pagbank_credit: Decimal = ZERO
    credit_ifood: Decimal = ZERO

    # Debits (expenses)
    debit_caixa: Decimal = ZERO
    debit_pagbank_debit: Decimal = ZERO
    debit_pagbank_credit: Decimal = ZERO
    debit_loteria: Decimal = ZERO

    @property
    def total_revenues(self) -> Decimal:
        return sum((getattr(self, name) for name in CREDIT_FIELDS), ZERO)

    @property
    def total_expenses(self) -> Decimal:
        return sum((getattr(self, name) for name in DEBIT_FIELDS), ZERO)

    @property
    def net_result(self) -> Decimal:
        return self.total_revenues - self.total_expenses

    def __add__(self, other: object) -> LeafAmounts:
        if not isinstance(other, LeafAmounts):
            return NotImplemented
        return LeafAmounts(
            **{name: getattr(self, name) + getattr(other, name) for name in LEAF_FIELDS}
        )

    def as_dict(self) -> dict[str, Decimal]:
        """Leaf amounts keyed by field name, in declaration order."""
        return {name: getattr(self, name) for name in LEAF_FIELDS}

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> LeafAmounts:
        """
        Build from a mapping of leaf names to numeric values.

        Keys that are not leaf fields are ignored; missing leaves are zero.
        """
        return cls(
            **{
                name: to_amount(data[name], name)
                for name in LEAF_FIELDS
                if name in data and data[name] is not None
            }
        )


def sum_amounts(amounts: Iterable[LeafAmounts]) -> LeafAmounts:
    """Field-wise sum of leaf amounts; an empty iterable sums to all zeros."""
    return reduce(operator.add, amounts, LeafAmounts())


class _DerivedTotals:
    """Derived totals exposed on rows that carry ``amounts``."""

    amounts: LeafAmounts

    @property
    def total_revenues(self) -> Decimal:
        return self.amounts.total_revenues

    @property
    def total_expenses(self) -> Decimal:
        return self.amounts.total_expenses

    @property
    def net_result(self) -> Decimal:
        return self.amounts.net_result


@dataclass(frozen=True)
class FinancialEntry(_DerivedTotals):
    """
    One store's credits and debits for one month.

    ``id`` is ``None`` until the entry store assigns one on save.
    """

    store: str
    year: int
    month: str
    amounts: LeafAmounts = field(default_factory=LeafAmounts)
    id: UUID | None = None

    is_aggregated: ClassVar[bool] = False

    @property
    def period(self) -> Period:
        return Period(self.year, self.month)

    @classmethod
    def create(
        cls,
        store: str,
        year: int,
        month: str,
        id: UUID | None = None,
        **leaves: object,
    ) -> FinancialEntry:
        """Convenience constructor taking leaf amounts as keyword arguments."""
        unknown = set(leaves) - set(LEAF_FIELDS)
        if unknown:
            raise TypeError(f"Unknown leaf fields: {sorted(unknown)}")
        return cls(
            store=store,
            year=year,
            month=month,
            amounts=LeafAmounts.from_mapping(leaves),
            id=id,
        )

    def with_amounts(self, **leaves: object) -> FinancialEntry:
        """Copy with some leaves replaced; derived totals follow automatically."""
        unknown = set(leaves) - set(LEAF_FIELDS)
        if unknown:
            raise TypeError(f"Unknown leaf fields: {sorted(unknown)}")
        converted = {name: to_amount(value, name) for name, value in leaves.items()}
        return replace(self, amounts=replace(self.amounts, **converted))

    def with_dimensions(
        self,
        store: str | None = None,
        year: int | None = None,
        month: str | None = None,
    ) -> FinancialEntry:
        """Copy with store and/or period changed; id and leaves are kept."""
        return replace(
            self,
            store=self.store if store is None else store,
            year=self.year if year is None else year,
            month=self.month if month is None else month,
        )


@dataclass(frozen=True)
class AggregatedRow(_DerivedTotals):
    """
    Consolidated row: the sum of every store's entry for one period.

    Carries no id; edit and delete are not offered on it.
    """

    year: int
    month: str
    amounts: LeafAmounts
    entry_count: int
    store: str = CONSOLIDATED_STORE_LABEL

    is_aggregated: ClassVar[bool] = True

    @property
    def id(self) -> None:
        return None

    @property
    def period(self) -> Period:
        return Period(self.year, self.month)


ReportRow = Union[FinancialEntry, AggregatedRow]


def validate_entry(entry: FinancialEntry) -> None:
    """
    Check an entry before it is persisted.

    Raises:
        MissingStoreError: store is empty or blank.
        InvalidYearError: year is not a positive int.
        InvalidMonthError: month is not ``"01"``..``"12"``.
        InvalidAmountError: a leaf is not a finite Decimal with at most
            two decimal places, or too large for the money column.
    """
    if not isinstance(entry.store, str) or not entry.store.strip():
        raise MissingStoreError()
    if isinstance(entry.year, bool) or not isinstance(entry.year, int) or entry.year <= 0:
        raise InvalidYearError(entry.year)
    if not is_month_code(entry.month):
        raise InvalidMonthError(entry.month)
    for name, value in entry.amounts.as_dict().items():
        if not isinstance(value, Decimal) or not value.is_finite():
            raise InvalidAmountError(name, value)
        if value != value.quantize(CENT):
            raise InvalidAmountError(name, value)
        if abs(value) >= AMOUNT_LIMIT:
            raise InvalidAmountError(name, value)
