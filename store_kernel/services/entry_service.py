"""
Entry store write service.

Responsibility:
    Creates, replaces and deletes monthly store entries.  This is the place
    where entries are validated: everything downstream (aggregation,
    reports, export) assumes well-formed entries and never checks again.

Invariants enforced:
    - One entry per (store, year, month).  Checked before the write so the
      caller gets ``DuplicateEntryError`` instead of a database error; the
      unique constraint on the table backs it up.
    - The stored total columns are always rewritten from the leaves.
    - Consolidated rows are never written.

Failure modes:
    - ValidationError subclasses for malformed input (see validate_entry).
    - DuplicateEntryError when the period is already taken by the store.
    - EntryNotFoundError for update/delete of an unknown id.
    - AggregatedRowMutationError when a consolidated row is passed in.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select

from store_kernel.domain.entries import (
    LEAF_FIELDS,
    FinancialEntry,
    ReportRow,
    validate_entry,
)
from store_kernel.exceptions import (
    AggregatedRowMutationError,
    DuplicateEntryError,
    EntryNotFoundError,
)
from store_kernel.logging_config import LogContext, get_logger
from store_kernel.models.financial_record import FinancialRecord
from store_kernel.selectors.entry_selector import record_to_entry
from store_kernel.services.base import BaseService

logger = get_logger("services.entry")


def _write_amounts(record: FinancialRecord, entry: FinancialEntry) -> None:
    """Copy dimensions and leaves onto the row and recompute stored totals."""
    record.store = entry.store.strip()
    record.year = entry.year
    record.month = entry.month
    for name, value in entry.amounts.as_dict().items():
        setattr(record, name, value)
    record.total_revenues = entry.total_revenues
    record.total_expenses = entry.total_expenses
    record.net_result = entry.net_result


class EntryService(BaseService[FinancialRecord]):
    """Save, update and delete financial entries."""

    def _get_record(self, entry_id: UUID | None) -> FinancialRecord:
        if entry_id is None:
            raise EntryNotFoundError(None)
        record = self.session.get(FinancialRecord, entry_id)
        if record is None:
            raise EntryNotFoundError(str(entry_id))
        return record

    def _ensure_period_free(
        self,
        entry: FinancialEntry,
        exclude_id: UUID | None = None,
    ) -> None:
        stmt = select(FinancialRecord.id).where(
            FinancialRecord.store == entry.store.strip(),
            FinancialRecord.year == entry.year,
            FinancialRecord.month == entry.month,
        )
        if exclude_id is not None:
            stmt = stmt.where(FinancialRecord.id != exclude_id)
        if self.session.execute(stmt).first() is not None:
            raise DuplicateEntryError(entry.store.strip(), entry.year, entry.month)

    def save(self, entry: FinancialEntry) -> UUID:
        """
        Persist a new entry.

        An id already present on ``entry`` is kept; otherwise a new one is
        generated.

        Returns:
            The id of the stored entry.
        """
        if entry.is_aggregated:
            raise AggregatedRowMutationError(entry.year, entry.month)
        validate_entry(entry)

        with LogContext.bind(store=entry.store, period=str(entry.period)):
            self._ensure_period_free(entry)

            record = FinancialRecord()
            if entry.id is not None:
                record.id = entry.id
            _write_amounts(record, entry)
            self.session.add(record)
            self.session.flush()

            logger.info(
                "financial_entry_saved",
                extra={
                    "entry_id": str(record.id),
                    "total_revenues": entry.total_revenues,
                    "total_expenses": entry.total_expenses,
                    "net_result": entry.net_result,
                },
            )
        return record.id

    def update(self, entry: ReportRow) -> FinancialEntry:
        """
        Replace an existing entry's dimensions and leaves.

        The id must refer to a stored entry.  Derived totals are recomputed
        from the new leaves.

        Returns:
            The entry as stored.
        """
        if entry.is_aggregated:
            raise AggregatedRowMutationError(entry.year, entry.month)
        record = self._get_record(entry.id)
        validate_entry(entry)

        changed = [
            name for name in LEAF_FIELDS
            if getattr(entry.amounts, name) != getattr(record, name)
        ]

        with LogContext.bind(store=entry.store, period=str(entry.period)):
            self._ensure_period_free(entry, exclude_id=record.id)
            _write_amounts(record, entry)
            self.session.flush()

            logger.info(
                "financial_entry_updated",
                extra={
                    "entry_id": str(record.id),
                    "changed_leaves": changed,
                    "net_result": entry.net_result,
                },
            )
        return record_to_entry(record)

    def delete(self, entry_id: UUID | None) -> None:
        """
        Delete an entry by id.

        Raises:
            EntryNotFoundError: If no entry has this id.
        """
        record = self._get_record(entry_id)
        self.session.delete(record)
        self.session.flush()
        logger.info(
            "financial_entry_deleted",
            extra={
                "entry_id": str(entry_id),
                "store": record.store,
                "period": f"{record.year}-{record.month}",
            },
        )
