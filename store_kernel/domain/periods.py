"""
Reporting periods.

A period is the ``(year, month)`` bucket every entry belongs to. Months are
always the zero-padded strings ``"01"``..``"12"``, so comparing them as
strings orders them chronologically.

Pure module: no I/O, no clock.
"""

from __future__ import annotations

from dataclasses import dataclass

MONTH_CODES: tuple[str, ...] = tuple(f"{m:02d}" for m in range(1, 13))

MONTH_NAMES: dict[str, str] = {
    "01": "Janeiro",
    "02": "Fevereiro",
    "03": "Março",
    "04": "Abril",
    "05": "Maio",
    "06": "Junho",
    "07": "Julho",
    "08": "Agosto",
    "09": "Setembro",
    "10": "Outubro",
    "11": "Novembro",
    "12": "Dezembro",
}


def is_month_code(value: object) -> bool:
    """True if ``value`` is one of ``"01"``..``"12"``."""
    return isinstance(value, str) and value in MONTH_CODES


def month_name(month: str) -> str:
    """Full month name; unknown codes are returned unchanged."""
    return MONTH_NAMES.get(month, month)


@dataclass(frozen=True, order=True)
class Period:
    """
    A (year, month) reporting bucket.

    Field order makes the dataclass ordering chronological: year first,
    then the zero-padded month string.
    """

    year: int
    month: str

    @property
    def key(self) -> tuple[int, str]:
        return (self.year, self.month)

    @property
    def label(self) -> str:
        """Long label as shown in listings, e.g. ``"Janeiro / 2024"``."""
        return f"{month_name(self.month)} / {self.year}"

    @property
    def short_label(self) -> str:
        """Chart axis label, e.g. ``"Jan/2024"``."""
        return f"{month_name(self.month)[:3]}/{self.year}"

    @property
    def numeric_label(self) -> str:
        """Spreadsheet label, e.g. ``"01/2024"``."""
        return f"{self.month}/{self.year}"

    def __str__(self) -> str:
        return f"{self.year}-{self.month}"
