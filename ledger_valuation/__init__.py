"""
Ledger Valuation - Source Package

Derives point-in-time balance sheet values for declared asset and
liability line items from a raw transaction ledger.

DESIGN PRINCIPLES:
1. The valuation core is a pure function of (items, transactions, snapshot)
2. Inputs are never mutated; every call is a full recomputation
3. Category governance (caps per period) is applied deterministically
4. Storage, logging and validation live around the core, never inside it
"""

__version__ = "1.0.0"
__author__ = "Ledger Valuation Team"
