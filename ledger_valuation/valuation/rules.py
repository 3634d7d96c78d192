"""
Valuation Rules

Small, pure building blocks used by the aggregation engine:
- normalize_links: resolves the legacy string/object union once
- period_key: maps a date to a governance bucket
- transaction_impact: signed effect of one transaction on one item
- parse_keywords / matches_keywords: optional description narrowing

IMPORTANT: The sign convention for assets is inverted from the naive
reading. An expense ADDS to an asset (cash flowing into a reserve or into
project work-in-progress) and an income REDUCES it (a withdrawal).
For liabilities, income (loan proceeds) adds and expense (repayment) reduces.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    CategoryLink,
    GovernancePeriod,
    ItemType,
    LinkedCategoryEntry,
    NormalizedLink,
)
from ledger_valuation.models.ledger import Transaction, TransactionType


LIFETIME_BUCKET = "lifetime"


def _positive_or_none(cap: Optional[Decimal]) -> Optional[Decimal]:
    if cap is None or cap <= 0:
        return None
    return cap


def normalize_links(
    linked_categories: Optional[Iterable[Union[LinkedCategoryEntry, Mapping]]],
) -> list[NormalizedLink]:
    """
    Upgrade category links to fully-specified governance rules.

    - "Cloud"                         -> Cloud, no cap, lifetime
    - {"name": "Cloud", "cap": 1000}  -> Cloud, cap 1000, lifetime
    - non-positive caps become unset

    Returns a new list in input order; the input is not touched.
    """
    normalized = []

    for entry in linked_categories or []:
        if isinstance(entry, str):
            normalized.append(NormalizedLink(name=entry.strip()))
            continue

        if not isinstance(entry, CategoryLink):
            entry = CategoryLink.model_validate(entry)

        normalized.append(NormalizedLink(
            name=entry.name,
            cap=_positive_or_none(entry.cap),
            period=entry.period or GovernancePeriod.LIFETIME,
        ))

    return normalized


def parse_date(date_str: str) -> Optional[date]:
    """
    Parse the leading YYYY-MM-DD of a ledger date.

    Returns None for anything that is not a real calendar date.
    """
    if not isinstance(date_str, str):
        return None
    try:
        return date.fromisoformat(date_str.strip()[:10])
    except ValueError:
        return None


def period_key(
    date_str: str,
    period: Optional[GovernancePeriod] = GovernancePeriod.MONTHLY,
) -> Optional[str]:
    """
    Map a transaction date to its governance bucket.

    - monthly (default): "2023-01"
    - quarterly:         "2023-Q1"
    - yearly:            "2023"
    - lifetime:          "lifetime" (one bucket for everything)

    Keys are for grouping only, never for ordering or display.
    Returns None when the date cannot be parsed.
    """
    if period == GovernancePeriod.LIFETIME:
        return LIFETIME_BUCKET

    parsed = parse_date(date_str)
    if parsed is None:
        return None

    if period == GovernancePeriod.QUARTERLY:
        quarter = (parsed.month - 1) // 3 + 1
        return f"{parsed.year}-Q{quarter}"
    if period == GovernancePeriod.YEARLY:
        return f"{parsed.year}"

    return f"{parsed.year}-{parsed.month:02d}"


def transaction_impact(
    transaction: Transaction,
    item: Union[BalanceSheetItem, ItemType],
) -> Decimal:
    """Signed effect of one transaction on one item's value."""
    item_type = item if isinstance(item, ItemType) else item.type

    if item_type == ItemType.ASSET:
        increases = transaction.type == TransactionType.EXPENSE
    else:
        increases = transaction.type == TransactionType.INCOME

    return transaction.amount if increases else -transaction.amount


def parse_keywords(linked_keywords: Optional[str]) -> list[str]:
    """Split a comma-separated keyword filter into lowercase fragments."""
    if not linked_keywords:
        return []
    keywords = (k.strip().lower() for k in linked_keywords.split(","))
    return [k for k in keywords if k]


def matches_keywords(description: Optional[str], keywords: list[str]) -> bool:
    """True if no filter is configured or the description contains any keyword."""
    if not keywords:
        return True
    text = (description or "").lower()
    return any(keyword in text for keyword in keywords)
