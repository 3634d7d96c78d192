"""
Transaction Ledger Models

The ledger is owned by the host application (ingestion, parsing and sync
are out of scope here). These models only describe what the valuation
engine reads.

DESIGN DECISION: Transactions are frozen. The engine reads them and never
mutates or deletes them, so the same ledger can be valued repeatedly and
concurrently.

DESIGN DECISION: `date` stays a string. Historical ledger data is not
guaranteed clean, and snapshot filtering compares ISO date strings
lexicographically. Calendar parsing happens only where a period bucket is
needed, and a malformed date there is skipped rather than raised.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionType(str, Enum):
    """
    Income/expense classification of a transaction.

    The amount is always a magnitude; the sign is inferred from this.
    """
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(BaseModel):
    """A single immutable ledger entry."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    transaction_id: Optional[str] = Field(
        default=None,
        description="Host-assigned identifier"
    )
    date: str = Field(
        ...,
        description="Calendar date as YYYY-MM-DD (lexicographically comparable)"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative magnitude; sign comes from `type`"
    )
    category: str = Field(
        default="",
        description="Free-text category label (matched case-insensitively)"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    description: str = Field(
        default="",
        description="Free text, used for optional keyword narrowing"
    )
    notes: Optional[str] = None
    source_file: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE
