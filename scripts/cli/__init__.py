"""
Store finance CLI -- record monthly store entries and print reports.

Entry point: ``store-finance`` (console script) or ``python -m scripts.cli``.
"""

from scripts.cli.main import main

__all__ = ["main"]
