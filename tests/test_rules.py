"""
Tests for the valuation building blocks: link normalization, period keys,
sign resolution and keyword parsing.
"""

from decimal import Decimal

import pytest

from ledger_valuation.models.balance_sheet import (
    CategoryLink,
    GovernancePeriod,
    ItemType,
    NormalizedLink,
)
from ledger_valuation.models.ledger import Transaction, TransactionType
from ledger_valuation.valuation.rules import (
    matches_keywords,
    normalize_links,
    parse_date,
    parse_keywords,
    period_key,
    transaction_impact,
)


class TestNormalizeLinks:
    """Tests for normalize_links."""

    def test_string_becomes_uncapped_lifetime(self):
        assert normalize_links(["Cloud"]) == [
            NormalizedLink(name="Cloud", cap=None, period=GovernancePeriod.LIFETIME)
        ]

    def test_object_period_defaults_to_lifetime(self):
        [link] = normalize_links([CategoryLink(name="Taxes", cap=Decimal("50000"))])
        assert link.period == GovernancePeriod.LIFETIME
        assert link.cap == Decimal("50000")
        assert link.is_bucketed is False

    def test_explicit_period_is_kept(self):
        [link] = normalize_links([
            CategoryLink(name="Cloud", cap=Decimal("3000"), period=GovernancePeriod.MONTHLY)
        ])
        assert link.period == GovernancePeriod.MONTHLY
        assert link.is_bucketed is True

    def test_non_positive_cap_becomes_unset(self):
        links = normalize_links([
            CategoryLink(name="A", cap=Decimal("0"), period=GovernancePeriod.MONTHLY),
            CategoryLink(name="B", cap=Decimal("-1"), period=GovernancePeriod.MONTHLY),
        ])
        assert [link.cap for link in links] == [None, None]
        assert not any(link.is_bucketed for link in links)

    def test_accepts_raw_mappings(self):
        [link] = normalize_links([{"name": "Cloud", "cap": 1000, "period": "quarterly"}])
        assert link == NormalizedLink(
            name="Cloud", cap=Decimal("1000"), period=GovernancePeriod.QUARTERLY
        )

    def test_preserves_order_and_does_not_mutate_input(self):
        entries = ["B", CategoryLink(name="A"), "C"]
        snapshot = list(entries)
        links = normalize_links(entries)
        assert [link.name for link in links] == ["B", "A", "C"]
        assert entries == snapshot

    def test_none_or_empty(self):
        assert normalize_links(None) == []
        assert normalize_links([]) == []


class TestPeriodKey:
    """Tests for period_key."""

    @pytest.mark.parametrize(
        "date_str, period, expected",
        [
            ("2023-01-15", GovernancePeriod.MONTHLY, "2023-01"),
            ("2023-11-30", GovernancePeriod.MONTHLY, "2023-11"),
            ("2023-03-31", GovernancePeriod.QUARTERLY, "2023-Q1"),
            ("2023-04-01", GovernancePeriod.QUARTERLY, "2023-Q2"),
            ("2023-12-31", GovernancePeriod.QUARTERLY, "2023-Q4"),
            ("2023-07-04", GovernancePeriod.YEARLY, "2023"),
        ],
    )
    def test_bucket_keys(self, date_str, period, expected):
        assert period_key(date_str, period) == expected

    def test_monthly_is_default(self):
        assert period_key("2024-02-29") == "2024-02"
        assert period_key("2024-02-29", None) == "2024-02"

    def test_lifetime_is_single_bucket(self):
        assert period_key("2023-01-01", GovernancePeriod.LIFETIME) == period_key(
            "1999-09-09", GovernancePeriod.LIFETIME
        )

    def test_timestamp_suffix_is_ignored(self):
        assert period_key("2023-05-06T12:00:00Z", GovernancePeriod.MONTHLY) == "2023-05"

    @pytest.mark.parametrize("bad", ["", "not a date", "2023-02-30", "2023-13-01", "15/01/2023"])
    def test_malformed_dates_return_none(self, bad):
        assert period_key(bad, GovernancePeriod.MONTHLY) is None
        assert parse_date(bad) is None


class TestTransactionImpact:
    """Tests for the sign convention."""

    def _tx(self, type_, amount="100"):
        return Transaction(
            date="2023-01-01",
            amount=Decimal(amount),
            category="X",
            type=type_,
        )

    def test_asset_expense_increases(self):
        assert transaction_impact(self._tx(TransactionType.EXPENSE), ItemType.ASSET) == 100

    def test_asset_income_decreases(self):
        assert transaction_impact(self._tx(TransactionType.INCOME), ItemType.ASSET) == -100

    def test_liability_income_increases(self):
        assert transaction_impact(self._tx(TransactionType.INCOME), ItemType.LIABILITY) == 100

    def test_liability_expense_decreases(self):
        assert transaction_impact(self._tx(TransactionType.EXPENSE), ItemType.LIABILITY) == -100


class TestKeywords:
    """Tests for keyword parsing and matching."""

    def test_parse_keywords(self):
        assert parse_keywords(" AWS, Azure ,,gcp ") == ["aws", "azure", "gcp"]

    def test_parse_empty(self):
        assert parse_keywords(None) == []
        assert parse_keywords("") == []
        assert parse_keywords(" , ") == []

    def test_matches_is_case_insensitive_substring(self):
        assert matches_keywords("Monthly AWS bill", ["aws"])
        assert not matches_keywords("Monthly GCP bill", ["aws"])

    def test_no_keywords_matches_everything(self):
        assert matches_keywords("anything", [])
        assert matches_keywords(None, [])
