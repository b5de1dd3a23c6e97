"""
Module: store_kernel.models.financial_record
Responsibility: ORM persistence for monthly store entries.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants enforced:
    - One row per (store, year, month) (uq_financial_record_period).
    - total_revenues, total_expenses and net_result are denormalized copies
      written by EntryService from the leaf columns on every save/update.
      Readers rebuild the totals from the leaves and never trust these
      columns; they exist so that SQL consumers of the table see them.
"""

from decimal import Decimal

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from store_kernel.db.base import TrackedBase


class FinancialRecord(TrackedBase):
    """One store's credits and debits for one month."""

    __tablename__ = "financial_records"

    __table_args__ = (
        UniqueConstraint("store", "year", "month", name="uq_financial_record_period"),
        Index("idx_financial_record_period", "year", "month"),
    )

    store: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[str] = mapped_column(String(2), nullable=False)

    # Credits (revenues)
    credit_caixa: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    credit_delta: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    credit_pagbank_debit: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    credit_pagbank_credit: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    credit_ifood: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    total_revenues: Mapped[Decimal] = mapped_column(default=Decimal("0"))

    # Debits (expenses)
    debit_caixa: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    debit_pagbank_debit: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    debit_pagbank_credit: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    debit_loteria: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    total_expenses: Mapped[Decimal] = mapped_column(default=Decimal("0"))

    net_result: Mapped[Decimal] = mapped_column(default=Decimal("0"))

    def __repr__(self) -> str:
        return f"<FinancialRecord {self.store} {self.year}-{self.month}>"
