"""
Balance Sheet Summary

Folds item valuations and the derived cash position into a full
balance sheet (total assets, total liabilities, net worth), and lists the
snapshot years and ledger categories a host can offer for selection.
"""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    BalanceSheetReport,
    ItemType,
    ItemValuation,
)
from ledger_valuation.models.ledger import Transaction, TransactionType
from ledger_valuation.valuation.engine import (
    TODAY,
    ZERO,
    SnapshotSelection,
    filter_snapshot,
    index_by_category,
    resolve_cutoff,
    value_item,
)
from ledger_valuation.valuation.rules import parse_date


def cash_position(
    transactions: Iterable[Transaction],
    starting_balance: Decimal = ZERO,
) -> Decimal:
    """
    Starting balance plus all income minus all expenses.

    A float or int starting balance is converted through its string form,
    so 500.1 becomes Decimal("500.1").
    """
    cash = Decimal(str(starting_balance))
    for transaction in transactions:
        if transaction.type == TransactionType.INCOME:
            cash += transaction.amount
        else:
            cash -= transaction.amount
    return cash


def summarize_totals(
    valuations: Sequence[ItemValuation],
    cash: Decimal,
) -> tuple[Decimal, Decimal, Decimal]:
    """
    Compute (total_assets, total_liabilities, net_worth).

    Positive cash is an asset; an overdrawn (negative) cash position
    is carried as a liability.
    """
    asset_items = sum(
        (v.value for v in valuations if v.type == ItemType.ASSET), ZERO
    )
    liability_items = sum(
        (v.value for v in valuations if v.type == ItemType.LIABILITY), ZERO
    )

    total_assets = asset_items + (cash if cash > 0 else ZERO)
    total_liabilities = liability_items + (abs(cash) if cash < 0 else ZERO)

    return total_assets, total_liabilities, total_assets - total_liabilities


def build_report(
    items: Iterable[BalanceSheetItem],
    transactions: Iterable[Transaction],
    snapshot: SnapshotSelection = TODAY,
    starting_balance: Decimal = ZERO,
    correlation_id: Optional[UUID] = None,
) -> BalanceSheetReport:
    """Value every item and the cash position at one snapshot."""
    cutoff = resolve_cutoff(snapshot)
    snapshot_ledger = filter_snapshot(transactions, cutoff)
    index = index_by_category(snapshot_ledger)

    valuations = [
        ItemValuation(
            item_id=item.id,
            name=item.name,
            type=item.type,
            category=item.category,
            is_calculated=item.is_calculated,
            value=value_item(item, snapshot_ledger, index=index),
        )
        for item in items
    ]

    cash = cash_position(snapshot_ledger, starting_balance)
    total_assets, total_liabilities, net_worth = summarize_totals(valuations, cash)

    return BalanceSheetReport(
        snapshot=TODAY if snapshot is None else str(snapshot),
        cutoff=cutoff,
        correlation_id=correlation_id,
        valuations=valuations,
        cash_position=cash,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        net_worth=net_worth,
    )


def available_years(
    transactions: Iterable[Transaction],
    current_year: Optional[int] = None,
) -> list[int]:
    """Years present in the ledger plus the current year, newest first."""
    years = {current_year if current_year is not None else date.today().year}
    for transaction in transactions:
        parsed = parse_date(transaction.date)
        if parsed is not None:
            years.add(parsed.year)
    return sorted(years, reverse=True)


def available_categories(transactions: Iterable[Transaction]) -> list[str]:
    """Distinct non-empty category labels in the ledger, sorted."""
    return sorted({t.category for t in transactions if t.category})
