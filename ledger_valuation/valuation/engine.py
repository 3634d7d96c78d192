"""
Balance Sheet Valuation Engine

DESIGN DECISION: Valuation is a PURE function of
(items, transactions, snapshot). No I/O, no settings, no shared state.
The host recomputes in full whenever any of the three inputs changes.

Pipeline, per item and independently of every other item:
1. Snapshot filter   - keep transactions dated on or before the cutoff
2. Normalize links   - legacy strings become full governance rules
3. Select            - category match (case-insensitive) + keyword filter
4. Sign              - signed impact per the item's polarity
5. Aggregate + cap   - lifetime sum or per-period buckets, caps limit growth only
6. Finalize          - global max value, then floor at zero

GUARANTEES:
- Inputs are never mutated (models are frozen, only local structures are built)
- Result does not depend on transaction order or link order
- No exception escapes for data that conforms to the models; malformed
  dates are skipped from period buckets and logged
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal
from typing import Optional, Union

import structlog

from ledger_valuation.models.balance_sheet import BalanceSheetItem, NormalizedLink
from ledger_valuation.models.ledger import Transaction
from ledger_valuation.valuation.rules import (
    matches_keywords,
    normalize_links,
    parse_keywords,
    period_key,
    transaction_impact,
)


logger = structlog.get_logger(__name__)

TODAY = "today"

SnapshotSelection = Union[None, str, int, date]
CategoryIndex = Mapping[str, Sequence[Transaction]]

ZERO = Decimal("0")


# =============================================================================
# SNAPSHOT FILTER
# =============================================================================

def resolve_cutoff(snapshot: SnapshotSelection = TODAY) -> Optional[str]:
    """
    Turn a snapshot selection into a cutoff date string.

    - None / "today"  -> None (no limit)
    - 2023 / "2023"   -> "2023-12-31" (end of that year)
    - date(2023,1,31) -> "2023-01-31"
    - "2023-01-31"    -> "2023-01-31"
    """
    if snapshot is None:
        return None
    if isinstance(snapshot, int):
        return f"{snapshot:04d}-12-31"
    if isinstance(snapshot, date):
        return snapshot.isoformat()[:10]

    text = str(snapshot).strip()
    if not text or text.lower() == TODAY:
        return None
    if len(text) == 4 and text.isdigit():
        return f"{text}-12-31"
    return text


def filter_snapshot(
    transactions: Iterable[Transaction],
    cutoff: Optional[str],
) -> list[Transaction]:
    """
    Restrict the ledger to transactions on or before `cutoff`.

    Dates are compared as ISO strings. Order is preserved.
    """
    if cutoff is None:
        return list(transactions)
    return [t for t in transactions if t.date <= cutoff]


def index_by_category(transactions: Iterable[Transaction]) -> dict[str, list[Transaction]]:
    """Group transactions by lowercased category, preserving order."""
    index: dict[str, list[Transaction]] = defaultdict(list)
    for transaction in transactions:
        index[transaction.category.lower()].append(transaction)
    return dict(index)


# =============================================================================
# AGGREGATION & CAPPING
# =============================================================================

def _lifetime_contribution(
    selected: list[Transaction],
    link: NormalizedLink,
    item: BalanceSheetItem,
) -> Decimal:
    total = sum((transaction_impact(t, item) for t in selected), ZERO)
    if link.cap is not None and total > link.cap:
        return link.cap
    return total


def _bucketed_contribution(
    selected: list[Transaction],
    link: NormalizedLink,
    item: BalanceSheetItem,
) -> Decimal:
    buckets: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for transaction in selected:
        key = period_key(transaction.date, link.period)
        if key is None:
            logger.warning(
                "malformed_date_skipped",
                item_id=item.id,
                category=link.name,
                date=transaction.date,
                transaction_id=transaction.transaction_id,
            )
            continue
        buckets[key] += transaction_impact(transaction, item)

    contribution = ZERO
    for amount in buckets.values():
        # Caps limit growth only; refunds and repayments pass through in full
        if amount > 0 and link.cap is not None:
            amount = min(amount, link.cap)
        contribution += amount

    return contribution


def aggregate_item(
    item: BalanceSheetItem,
    transactions: Iterable[Transaction],
    index: Optional[CategoryIndex] = None,
) -> Decimal:
    """
    Running total for a calculated item before the global max and floor.

    Args:
        item: The line item being valued
        transactions: Snapshot ledger (ignored when `index` is given)
        index: Optional pre-built index_by_category() of the same ledger
    """
    if index is None:
        index = index_by_category(transactions)

    running_total = item.initial_value or ZERO
    keywords = parse_keywords(item.linked_keywords)

    for link in normalize_links(item.linked_categories):
        if not link.name:
            continue

        selected = [
            t for t in index.get(link.name.lower(), ())
            if matches_keywords(t.description, keywords)
        ]

        if link.is_bucketed:
            running_total += _bucketed_contribution(selected, link, item)
        else:
            running_total += _lifetime_contribution(selected, link, item)

    return running_total


# =============================================================================
# FINALIZER
# =============================================================================

def finalize_value(running_total: Decimal, item: BalanceSheetItem) -> Decimal:
    """Apply the item's global maximum (if positive) and floor at zero."""
    if item.max_value is not None and item.max_value > 0:
        running_total = min(running_total, item.max_value)
    return max(ZERO, running_total)


def value_item(
    item: BalanceSheetItem,
    transactions: Iterable[Transaction],
    index: Optional[CategoryIndex] = None,
) -> Decimal:
    """
    Value of one item against an already snapshot-filtered ledger.

    Manual items return their entered value verbatim.
    """
    if not item.is_calculated:
        return item.value if item.value is not None else ZERO

    running_total = aggregate_item(item, transactions, index=index)
    value = finalize_value(running_total, item)

    logger.debug(
        "item_valued",
        item_id=item.id,
        running_total=str(running_total),
        value=str(value),
    )
    return value


def valuate(
    items: Iterable[BalanceSheetItem],
    transactions: Iterable[Transaction],
    snapshot_date: SnapshotSelection = TODAY,
) -> dict[str, Decimal]:
    """
    Value every item at a snapshot.

    Args:
        items: Declared balance sheet items
        transactions: The full ledger
        snapshot_date: "today" (no limit), a year, or an ISO date cutoff

    Returns:
        Mapping of item id -> value
    """
    cutoff = resolve_cutoff(snapshot_date)
    snapshot = filter_snapshot(transactions, cutoff)
    index = index_by_category(snapshot)

    return {
        item.id: value_item(item, snapshot, index=index)
        for item in items
    }
