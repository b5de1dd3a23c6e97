"""Tests for reporting periods (store_kernel/domain/periods.py)."""

import pytest

from store_kernel.domain.periods import MONTH_CODES, Period, is_month_code, month_name


class TestMonthCodes:

    def test_twelve_zero_padded_codes(self):
        assert MONTH_CODES[0] == "01"
        assert MONTH_CODES[-1] == "12"
        assert len(MONTH_CODES) == 12

    @pytest.mark.parametrize("value, expected", [("01", True), ("12", True), ("1", False), ("13", False), (1, False)])
    def test_is_month_code(self, value, expected):
        assert is_month_code(value) is expected

    def test_month_name(self):
        assert month_name("03") == "Março"
        assert month_name("99") == "99"


class TestPeriod:

    def test_labels(self):
        period = Period(2024, "01")
        assert period.label == "Janeiro / 2024"
        assert period.short_label == "Jan/2024"
        assert period.numeric_label == "01/2024"
        assert str(period) == "2024-01"

    def test_chronological_ordering(self):
        periods = [Period(2024, "02"), Period(2023, "12"), Period(2024, "01")]
        assert sorted(periods) == [Period(2023, "12"), Period(2024, "01"), Period(2024, "02")]

    def test_hashable_key(self):
        assert {Period(2024, "01"): 1}[Period(2024, "01")] == 1
        assert Period(2024, "05").key == (2024, "05")
