"""Tests for engine and session management (store_kernel/db/engine.py)."""

import pytest
from sqlalchemy import func, select

from store_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    reset_engine,
    session_scope,
)
from store_kernel.models.financial_record import FinancialRecord
from store_kernel.services.entry_service import EntryService
from tests.conftest import make_entry


@pytest.fixture
def file_engine(tmp_path):
    engine = init_engine_from_url(f"sqlite:///{tmp_path / 'engine.db'}")
    create_tables()
    yield engine
    reset_engine()


def _count() -> int:
    session = get_session()
    try:
        return session.execute(select(func.count(FinancialRecord.id))).scalar_one()
    finally:
        session.close()


class TestSessionScope:

    def test_commits_on_success(self, file_engine):
        with session_scope() as session:
            EntryService(session).save(make_entry())
        assert _count() == 1

    def test_rolls_back_on_error(self, file_engine):
        with pytest.raises(RuntimeError):
            with session_scope() as session:
                EntryService(session).save(make_entry())
                raise RuntimeError("boom")
        assert _count() == 0


class TestEngineLifecycle:

    def test_get_engine_returns_initialized(self, file_engine):
        assert get_engine() is file_engine
        assert file_engine.dialect.name == "sqlite"

    def test_uninitialized(self, tmp_path):
        init_engine_from_url(f"sqlite:///{tmp_path / 'x.db'}")
        reset_engine()
        with pytest.raises(RuntimeError):
            get_engine()
        with pytest.raises(RuntimeError):
            get_session()
