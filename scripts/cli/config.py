"""CLI configuration: database URL and reporting config file."""

import os
from pathlib import Path

DEFAULT_DB_URL = "sqlite:///store_finance.db"


def db_url() -> str:
    """Database URL from STORE_FINANCE_DB_URL, else a local SQLite file."""
    return os.environ.get("STORE_FINANCE_DB_URL", DEFAULT_DB_URL)


def config_path() -> Path | None:
    """Reporting config YAML from STORE_FINANCE_CONFIG, if set."""
    value = os.environ.get("STORE_FINANCE_CONFIG", "").strip()
    return Path(value) if value else None
