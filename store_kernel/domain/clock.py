"""
Clock -- injectable time source.

Services that stamp reports with a generation time receive a ``Clock``
instead of calling ``datetime.now()`` so that tests get reproducible
metadata.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone


class Clock(ABC):
    """
    Abstract clock interface.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...


class SystemClock(Clock):
    """Production clock backed by the system time (UTC)."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """Test clock that always returns the same instant."""

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime(
            2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc
        )

    def now(self) -> datetime:
        return self._fixed_time
