"""Write services for the store finance kernel."""

from store_kernel.services.entry_service import EntryService

__all__ = ["EntryService"]
