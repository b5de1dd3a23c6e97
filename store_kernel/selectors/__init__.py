"""Selectors for the store finance kernel (read side)."""

from store_kernel.selectors.entry_selector import EntrySelector, record_to_entry

__all__ = ["EntrySelector", "record_to_entry"]
