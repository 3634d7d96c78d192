"""
Seeded balance sheet items.

A capital-governance starter sheet: a cash reserve fed by revenue
categories, a tax reserve with a lifetime cap, a project work-in-progress
asset with monthly caps on contractor and cloud spend, a manual
receivables line, an equipment loan and capped affiliate payables.
"""

from ledger_valuation.models.balance_sheet import BalanceSheetItem


DEFAULT_ITEMS: tuple[BalanceSheetItem, ...] = tuple(
    BalanceSheetItem.model_validate(raw)
    for raw in (
        {
            "id": "sp_asset_cash",
            "name": "Operating Cash Reserve",
            "type": "asset",
            "category": "cash",
            "isCalculated": True,
            "initialValue": 0,
            "linkedCategories": ["Client Revenue", "Stripe", "PayPal"],
        },
        {
            "id": "sp_asset_tax",
            "name": "Tax Reserve",
            "type": "asset",
            "category": "cash",
            "isCalculated": True,
            "initialValue": 0,
            "linkedCategories": [
                {"name": "Taxes", "cap": 50000, "period": "lifetime"},
            ],
        },
        {
            "id": "sp_asset_sneakpeek",
            "name": "Sneak Peek (Project WIP)",
            "type": "asset",
            "category": "other",
            "isCalculated": True,
            "initialValue": 0,
            "linkedCategories": [
                {"name": "Contractor Fees", "cap": 10000, "period": "monthly"},
                {"name": "Cloud Infrastructure", "cap": 3000, "period": "monthly"},
                {"name": "Software Subscriptions", "period": "lifetime"},
            ],
        },
        {
            "id": "sp_asset_ar",
            "name": "Accounts Receivable",
            "type": "asset",
            "category": "other",
            "value": 0,
            "isCalculated": False,
        },
        {
            "id": "sp_liab_loan",
            "name": "Launch Equipment Loan",
            "type": "liability",
            "category": "debt",
            "isCalculated": True,
            "initialValue": 0,
            "linkedCategories": [
                {"name": "Loan Proceeds", "period": "lifetime"},
            ],
        },
        {
            "id": "sp_liab_affiliate",
            "name": "Affiliate / Integration Payables",
            "type": "liability",
            "category": "other",
            "isCalculated": True,
            "initialValue": 0,
            "linkedCategories": [
                {"name": "Affiliate Commissions", "cap": 2000, "period": "monthly"},
            ],
        },
    )
)
