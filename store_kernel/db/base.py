"""
Module: store_kernel.db.base
Responsibility: Declarative base classes for the SQLAlchemy ORM models.
    Provides the UUID primary key convention, the type annotation map for
    consistent column types, and the TrackedBase mixin for timestamps.
Architecture position: Kernel > DB.  Lowest-level import target of the
    kernel; MUST NOT import from models/, services/, selectors/ or domain/.

Invariants enforced:
    - UUID primary keys generated with uuid4.
    - Decimal maps to Numeric(14, 2): amounts are stored with exactly the
      two decimal places they are entered with.  NEVER use float columns
      for money.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

MONEY_PRECISION = 14
MONEY_SCALE = 2


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Converts Python UUID objects to their 36-character string form on the
    way in and back to UUID on the way out.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - Decimal maps to Numeric(14, 2).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(MONEY_PRECISION, MONEY_SCALE),
        datetime: DateTime(timezone=True),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )


class TrackedBase(Base):
    """
    Abstract base with creation and modification timestamps.

    Guarantees:
        - created_at is set to server NOW() on INSERT and never changes.
        - updated_at is set on INSERT and refreshed on every UPDATE.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


UUID = PyUUID
