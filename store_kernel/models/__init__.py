"""ORM models for the store finance kernel."""

from store_kernel.models.financial_record import FinancialRecord

__all__ = ["FinancialRecord"]
