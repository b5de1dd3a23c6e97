"""
Store Finance Kernel

Monthly per-store financial entries and the pieces that persist them:
- Immutable entry values with derived totals computed from leaf amounts
- SQLAlchemy persistence with a unique entry per store and period
- Typed exceptions and structured JSON logging
"""

__version__ = "0.1.0"
