"""
BaseService -- abstract base for kernel write services.

Services receive a SQLAlchemy ``Session`` from the caller and persist
changes with ``session.flush()``; they never commit or roll back.  The
caller (``session_scope()``, the CLI, or a test fixture) owns the
transaction, so several writes can be made atomic together.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from store_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for all kernel services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide read queries -- those belong in selectors.
    """

    def __init__(self, session: Session):
        self.session = session
