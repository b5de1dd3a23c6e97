"""
Tests for the aggregator (store_reporting/aggregation.py).

Pure function tests -- no database.
"""

from decimal import Decimal

from store_kernel.domain.entries import CONSOLIDATED_STORE_LABEL, AggregatedRow, FinancialEntry
from store_kernel.domain.periods import Period
from store_reporting.aggregation import aggregate, consolidate, group_by_period
from tests.conftest import make_entry


def _scenario_entries() -> list[FinancialEntry]:
    return [
        make_entry("A", 2024, "01", credit_caixa="100", debit_caixa="40"),
        make_entry("B", 2024, "01", credit_caixa="50", debit_caixa="10"),
    ]


class TestGroupByPeriod:

    def test_partitions_by_year_and_month(self):
        entries = [
            make_entry("A", 2024, "02"),
            make_entry("A", 2024, "01"),
            make_entry("B", 2024, "02"),
        ]
        groups = group_by_period(entries)
        assert list(groups) == [Period(2024, "01"), Period(2024, "02")]
        assert [e.store for e in groups[Period(2024, "02")]] == ["A", "B"]

    def test_same_month_different_years_are_separate(self):
        groups = group_by_period([make_entry(year=2023, month="05"), make_entry(year=2024, month="05")])
        assert len(groups) == 2

    def test_empty(self):
        assert group_by_period([]) == {}


class TestAggregateAllStores:

    def test_scenario_a_consolidates_one_period(self):
        rows = aggregate(_scenario_entries())
        assert len(rows) == 1
        row = rows[0]
        assert isinstance(row, AggregatedRow)
        assert (row.year, row.month) == (2024, "01")
        assert row.total_revenues == Decimal("150")
        assert row.total_expenses == Decimal("50")
        assert row.net_result == Decimal("100")
        assert row.entry_count == 2
        assert row.store == CONSOLIDATED_STORE_LABEL
        assert row.id is None

    def test_leaves_are_summed_field_wise(self):
        rows = aggregate(
            [
                make_entry("A", credit_ifood="10.10", debit_loteria="1.01"),
                make_entry("B", credit_ifood="20.20", credit_delta="5.00"),
            ]
        )
        amounts = rows[0].amounts
        assert amounts.credit_ifood == Decimal("30.30")
        assert amounts.credit_delta == Decimal("5.00")
        assert amounts.debit_loteria == Decimal("1.01")

    def test_one_row_per_distinct_period(self):
        entries = [
            make_entry("A", 2024, "01"),
            make_entry("B", 2024, "01"),
            make_entry("A", 2024, "03"),
            make_entry("A", 2023, "12"),
        ]
        rows = aggregate(entries)
        assert [(r.year, r.month) for r in rows] == [(2023, "12"), (2024, "01"), (2024, "03")]

    def test_output_independent_of_input_order(self):
        entries = _scenario_entries() + [make_entry("C", 2023, "07", credit_caixa="1")]
        assert aggregate(entries) == aggregate(list(reversed(entries)))

    def test_custom_label(self):
        rows = aggregate(_scenario_entries(), label="Rede")
        assert rows[0].store == "Rede"

    def test_empty_input(self):
        assert aggregate([]) == ()

    def test_logs_counts(self, captured_logs):
        aggregate(_scenario_entries())
        logs = [r for r in captured_logs() if r["message"] == "entries_aggregated"]
        assert logs[-1]["input_count"] == 2
        assert logs[-1]["row_count"] == 1


class TestAggregateSingleStore:

    def test_scenario_b_filters_to_store(self):
        rows = aggregate(_scenario_entries(), store_filter="A")
        assert len(rows) == 1
        row = rows[0]
        assert row.store == "A"
        assert row.total_revenues == Decimal("100")
        assert row.total_expenses == Decimal("40")
        assert row.net_result == Decimal("60")

    def test_entries_returned_unchanged(self):
        entries = _scenario_entries()
        rows = aggregate(entries, store_filter="B")
        assert rows == (entries[1],)
        assert rows[0].is_aggregated is False

    def test_unknown_store_is_empty(self):
        assert aggregate(_scenario_entries(), store_filter="Z") == ()


class TestConsolidate:

    def test_counts_members(self):
        row = consolidate(Period(2024, "02"), [make_entry(month="02", credit_caixa="1")] * 3)
        assert row.entry_count == 3
        assert row.total_revenues == Decimal("3")
