"""Balance sheet valuation package."""

from ledger_valuation.valuation.engine import (
    TODAY,
    aggregate_item,
    filter_snapshot,
    finalize_value,
    index_by_category,
    resolve_cutoff,
    valuate,
    value_item,
)
from ledger_valuation.valuation.rules import (
    matches_keywords,
    normalize_links,
    parse_date,
    parse_keywords,
    period_key,
    transaction_impact,
)
from ledger_valuation.valuation.summary import (
    available_categories,
    available_years,
    build_report,
    cash_position,
    summarize_totals,
)

__all__ = [
    "TODAY",
    "aggregate_item",
    "available_categories",
    "available_years",
    "build_report",
    "cash_position",
    "filter_snapshot",
    "finalize_value",
    "index_by_category",
    "matches_keywords",
    "normalize_links",
    "parse_date",
    "parse_keywords",
    "period_key",
    "resolve_cutoff",
    "summarize_totals",
    "transaction_impact",
    "valuate",
    "value_item",
]
