"""
Reporting-specific test fixtures.

Provides:
- ReportingService instances wired to the test session
- A helper that stores entries through the entry service
"""

import pytest

from store_reporting.config import ReportingConfig
from store_reporting.service import ReportingService


@pytest.fixture
def reporting_config() -> ReportingConfig:
    """Standard reporting configuration for tests."""
    return ReportingConfig(entity_name="Rede Teste", stores=("Loja Centro", "Loja Norte"))


@pytest.fixture
def reporting_service(
    session,
    deterministic_clock,
    reporting_config,
) -> ReportingService:
    """ReportingService wired to the test session."""
    return ReportingService(
        session=session,
        clock=deterministic_clock,
        config=reporting_config,
    )


@pytest.fixture
def store_entries(entry_service):
    """Save entries and return their ids."""

    def _store(*entries):
        return [entry_service.save(e) for e in entries]

    return _store
