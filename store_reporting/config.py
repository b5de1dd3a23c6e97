"""
Reporting Configuration Schema.

Controls labels and presentation options of the financial reports.  Loaded
from defaults, a plain dict, or a YAML file such as::

    entity_name: Rede de Lojas
    currency: BRL
    consolidated_label: Todas as Lojas (Consolidado)
    sheet_name: Financeiro
    stores:
      - Loja Centro
      - Loja Norte
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Self

import yaml

from store_kernel.domain.entries import CONSOLIDATED_STORE_LABEL
from store_kernel.exceptions import ConfigError
from store_kernel.logging_config import get_logger

logger = get_logger("reporting.config")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(str(path), "top-level YAML value must be a mapping")
    return data


@dataclass
class ReportingConfig:
    """Configuration schema for the reporting package."""

    # Entity name shown on reports
    entity_name: str = "Store Network"

    # ISO 4217 currency of all amounts
    currency: str = "BRL"

    # Store label of consolidated rows
    consolidated_label: str = CONSOLIDATED_STORE_LABEL

    # Worksheet name of the spreadsheet export
    sheet_name: str = "Financeiro"

    # Known stores, in display order (for store pickers)
    stores: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.currency) != 3 or not self.currency.isalpha():
            raise ConfigError("currency", "must be a 3-letter ISO 4217 code")
        if not self.consolidated_label.strip():
            raise ConfigError("consolidated_label", "cannot be empty")
        if not self.sheet_name.strip() or len(self.sheet_name) > 31:
            raise ConfigError("sheet_name", "must be 1 to 31 characters")
        self.stores = tuple(self.stores)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(unknown[0], "unknown configuration key")
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Create config from a YAML file."""
        return cls.from_dict(load_yaml_file(Path(path)))
