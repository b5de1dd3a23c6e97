"""
Typed exception hierarchy for the store finance kernel.

Every error carries a class-level ``code`` (machine-readable, stable across
message wording changes) and stores its context as attributes, so callers
catch by type and read structured data instead of parsing messages:

    try:
        service.save(entry)
    except DuplicateEntryError as e:
        notify(f"{e.store} already has an entry for {e.month}/{e.year}")

Hierarchy::

    StoreFinanceError
    |
    +-- EntryError
    |   +-- EntryNotFoundError
    |   +-- DuplicateEntryError
    |   +-- AggregatedRowMutationError
    |
    +-- ValidationError
    |   +-- MissingStoreError
    |   +-- InvalidMonthError
    |   +-- InvalidYearError
    |   +-- InvalidAmountError
    |
    +-- ExportError
    |   +-- EmptyExportError
    |
    +-- ConfigError

The aggregation and report functions never raise any of these: they are
total over well-formed entries. Validation happens where entries enter the
system (``EntryService``).
"""

from __future__ import annotations


class StoreFinanceError(Exception):
    """Base exception for all store finance errors."""

    code: str = "STORE_FINANCE_ERROR"


# Entry lifecycle


class EntryError(StoreFinanceError):
    """Base exception for entry store errors."""

    code: str = "ENTRY_ERROR"


class EntryNotFoundError(EntryError):
    """No entry exists with the given id."""

    code: str = "ENTRY_NOT_FOUND"

    def __init__(self, entry_id: str | None):
        self.entry_id = entry_id
        super().__init__(f"Financial entry not found: {entry_id}")


class DuplicateEntryError(EntryError):
    """An entry already exists for this store and period."""

    code: str = "DUPLICATE_ENTRY"

    def __init__(self, store: str, year: int, month: str):
        self.store = store
        self.year = year
        self.month = month
        super().__init__(
            f"A financial entry already exists for store {store!r} "
            f"in {month}/{year}"
        )


class AggregatedRowMutationError(EntryError):
    """Consolidated rows are derived and cannot be edited or deleted."""

    code: str = "AGGREGATED_ROW_MUTATION"

    def __init__(self, year: int, month: str):
        self.year = year
        self.month = month
        super().__init__(
            f"Consolidated row {month}/{year} is derived from store entries "
            "and cannot be modified"
        )


# Input validation


class ValidationError(StoreFinanceError):
    """Base exception for malformed entry input."""

    code: str = "VALIDATION_ERROR"


class MissingStoreError(ValidationError):
    """Entry has no store name."""

    code: str = "MISSING_STORE"

    def __init__(self) -> None:
        super().__init__("A store must be selected")


class InvalidMonthError(ValidationError):
    """Month is not a zero-padded code between 01 and 12."""

    code: str = "INVALID_MONTH"

    def __init__(self, month: object):
        self.month = month
        super().__init__(f"Invalid month code: {month!r} (expected '01'..'12')")


class InvalidYearError(ValidationError):
    """Year is not a positive integer."""

    code: str = "INVALID_YEAR"

    def __init__(self, year: object):
        self.year = year
        super().__init__(f"Invalid year: {year!r}")


class InvalidAmountError(ValidationError):
    """Leaf amount is not a finite decimal with at most two places."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Invalid amount for {field}: {value!r}")


# Export


class ExportError(StoreFinanceError):
    """Base exception for export failures."""

    code: str = "EXPORT_ERROR"


class EmptyExportError(ExportError):
    """There are no rows to export."""

    code: str = "EMPTY_EXPORT"

    def __init__(self) -> None:
        super().__init__("No data to export")


# Configuration


class ConfigError(StoreFinanceError):
    """Configuration value is missing or invalid."""

    code: str = "CONFIG_ERROR"

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")
