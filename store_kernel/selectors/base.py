"""
Module: store_kernel.selectors.base
Responsibility: Base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/ and
    domain/.  Selectors NEVER create, modify, or delete data.

Invariants enforced:
    - Read-only access: selectors MUST NOT call session.add(), delete(),
      commit() or flush().
    - DTO return convention: selectors return domain values (frozen
      dataclasses), not ORM instances.
    - Session ownership: the caller owns the session and its transaction.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from store_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """Abstract base class for all selectors."""

    def __init__(self, session: Session):
        self.session = session
