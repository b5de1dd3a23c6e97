"""
Module: store_kernel.selectors.entry_selector
Responsibility: Read side of the entry store.  Loads persisted records and
    returns them as ``FinancialEntry`` values for the reporting core.

Invariants enforced:
    - Derived totals of returned entries come from the leaf columns; the
      stored total columns are not read.
    - Results are ordered by (year, month, store) so that callers get a
      stable snapshot.  Report ordering is still applied separately.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select

from store_kernel.domain.entries import LEAF_FIELDS, FinancialEntry, LeafAmounts
from store_kernel.exceptions import EntryNotFoundError
from store_kernel.logging_config import get_logger
from store_kernel.models.financial_record import FinancialRecord
from store_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.entry")


def record_to_entry(record: FinancialRecord) -> FinancialEntry:
    """Convert an ORM row to an immutable domain entry."""
    return FinancialEntry(
        store=record.store,
        year=record.year,
        month=record.month,
        amounts=LeafAmounts(**{name: getattr(record, name) for name in LEAF_FIELDS}),
        id=record.id,
    )


class EntrySelector(BaseSelector[FinancialRecord]):
    """Queries over persisted financial entries."""

    def list_entries(self, store: str | None = None) -> list[FinancialEntry]:
        """
        All entries, optionally restricted to one store.

        Args:
            store: Store name, or None/empty for every store.
        """
        stmt = select(FinancialRecord)
        if store:
            stmt = stmt.where(FinancialRecord.store == store)
        stmt = stmt.order_by(
            FinancialRecord.year, FinancialRecord.month, FinancialRecord.store,
        )

        records = self.session.execute(stmt).scalars().all()
        logger.debug(
            "entries_loaded",
            extra={"store_filter": store or "", "entry_count": len(records)},
        )
        return [record_to_entry(r) for r in records]

    def get(self, entry_id: UUID) -> FinancialEntry:
        """
        Get one entry by id.

        Raises:
            EntryNotFoundError: If no entry has this id.
        """
        record = self.session.get(FinancialRecord, entry_id)
        if record is None:
            raise EntryNotFoundError(str(entry_id))
        return record_to_entry(record)

    def find_for_period(self, store: str, year: int, month: str) -> FinancialEntry | None:
        """The entry of ``store`` for one period, or None."""
        stmt = select(FinancialRecord).where(
            FinancialRecord.store == store,
            FinancialRecord.year == year,
            FinancialRecord.month == month,
        )
        record = self.session.execute(stmt).scalar_one_or_none()
        return record_to_entry(record) if record is not None else None

    def distinct_stores(self) -> list[str]:
        """Store names that have at least one entry, alphabetically."""
        stmt = select(FinancialRecord.store).distinct().order_by(FinancialRecord.store)
        return list(self.session.execute(stmt).scalars().all())
