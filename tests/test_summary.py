"""
Tests for balance sheet summaries: cash position, totals, report building,
and the year/category listings offered for snapshot selection.
"""

from decimal import Decimal

import pytest

from ledger_valuation.constants import DEFAULT_ITEMS
from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    ItemType,
    ItemValuation,
)
from ledger_valuation.models.ledger import Transaction
from ledger_valuation.valuation.summary import (
    available_categories,
    available_years,
    build_report,
    cash_position,
    summarize_totals,
)


def tx(date_str, amount, category, type_, description=""):
    return Transaction(
        date=date_str,
        amount=Decimal(str(amount)),
        category=category,
        type=type_,
        description=description,
    )


@pytest.fixture
def ledger():
    return [
        tx("2022-11-03", 20000, "Loan Proceeds", "income"),
        tx("2023-01-10", 12000, "Contractor Fees", "expense"),
        tx("2023-01-20", 5000, "Client Revenue", "income"),
        tx("2023-02-14", 4000, "Cloud Infrastructure", "expense"),
        tx("2023-03-01", 1500, "Loan Proceeds", "expense", "Loan repayment"),
    ]


class TestCashPosition:
    """Tests for cash_position."""

    def test_income_minus_expense(self, ledger):
        # 20000 + 5000 - 12000 - 4000 - 1500
        assert cash_position(ledger) == Decimal("7500")

    def test_starting_balance_is_added(self, ledger):
        assert cash_position(ledger, Decimal("1000")) == Decimal("8500")

    def test_empty_ledger(self):
        assert cash_position([], Decimal("42")) == Decimal("42")

    def test_float_starting_balance(self, ledger):
        """Floats convert through their string form, so no binary noise."""
        assert cash_position(ledger, 500.1) == Decimal("8000.1")
        assert cash_position([], 0.1) == Decimal("0.1")

    def test_float_starting_balance_in_report(self):
        ledger = [tx("2023-01-01", 100, "Client Revenue", "income")]
        report = build_report(DEFAULT_ITEMS, ledger, starting_balance=500.0)
        assert report.cash_position == Decimal("600")


class TestTotals:
    """Tests for summarize_totals."""

    def _valuations(self):
        return [
            ItemValuation(item_id="a", name="A", type=ItemType.ASSET, value=Decimal("100")),
            ItemValuation(item_id="b", name="B", type=ItemType.ASSET, value=Decimal("50")),
            ItemValuation(item_id="l", name="L", type=ItemType.LIABILITY, value=Decimal("70")),
        ]

    def test_positive_cash_is_an_asset(self):
        assets, liabilities, net = summarize_totals(self._valuations(), Decimal("30"))
        assert (assets, liabilities, net) == (Decimal("180"), Decimal("70"), Decimal("110"))

    def test_negative_cash_is_a_liability(self):
        assets, liabilities, net = summarize_totals(self._valuations(), Decimal("-30"))
        assert (assets, liabilities, net) == (Decimal("150"), Decimal("100"), Decimal("50"))


class TestBuildReport:
    """Tests for build_report using the seeded default items."""

    def test_default_items_today(self, ledger):
        report = build_report(DEFAULT_ITEMS, ledger)

        assert report.snapshot == "today"
        assert report.cutoff is None
        # Contractor 12000 capped at 10000 for January, Cloud 4000 capped at 3000
        assert report.value_of("sp_asset_sneakpeek") == Decimal("13000")
        # Client Revenue is income, which reduces an asset: floors at zero
        assert report.value_of("sp_asset_cash") == Decimal("0")
        # Loan: proceeds 20000, repayment 1500
        assert report.value_of("sp_liab_loan") == Decimal("18500")
        assert report.value_of("sp_asset_ar") == Decimal("0")
        assert report.cash_position == Decimal("7500")
        assert report.total_assets == Decimal("20500")
        assert report.total_liabilities == Decimal("18500")
        assert report.net_worth == Decimal("2000")

    def test_year_snapshot(self, ledger):
        report = build_report(DEFAULT_ITEMS, ledger, snapshot=2022)

        assert report.cutoff == "2022-12-31"
        assert report.value_of("sp_liab_loan") == Decimal("20000")
        assert report.value_of("sp_asset_sneakpeek") == Decimal("0")
        assert report.cash_position == Decimal("20000")

    def test_as_mapping_covers_every_item(self, ledger):
        report = build_report(DEFAULT_ITEMS, ledger)
        assert set(report.as_mapping()) == {item.id for item in DEFAULT_ITEMS}

    def test_unknown_item_lookup(self, ledger):
        report = build_report([], ledger)
        assert report.value_of("missing") is None
        assert report.valuations == []

    def test_manual_item_in_report(self):
        house = BalanceSheetItem(id="house", name="House", type="asset", value=Decimal("300000"))
        report = build_report([house], [], starting_balance=Decimal("-500"))
        assert report.total_assets == Decimal("300000")
        assert report.total_liabilities == Decimal("500")


class TestListings:
    """Tests for available_years and available_categories."""

    def test_years_newest_first_with_current_year(self, ledger):
        assert available_years(ledger, current_year=2025) == [2025, 2023, 2022]

    def test_years_skip_unparseable_dates(self):
        ledger = [tx("garbage", 1, "X", "income"), tx("2021-05-05", 1, "X", "income")]
        assert available_years(ledger, current_year=2021) == [2021]

    def test_categories_sorted_and_distinct(self, ledger):
        ledger.append(tx("2023-04-01", 10, "", "expense"))
        assert available_categories(ledger) == [
            "Client Revenue",
            "Cloud Infrastructure",
            "Contractor Fees",
            "Loan Proceeds",
        ]
