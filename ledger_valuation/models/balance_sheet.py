"""
Balance Sheet Models

These models define the line items whose value the engine computes,
the category governance rules attached to them, and the shape of a
computed balance sheet.

DESIGN DECISION: Items arrive from a host-side editor that historically
stored category links either as bare strings or as {name, cap, period}
objects. Both shapes are accepted here (LinkedCategoryEntry) and resolved
exactly once by the normalizer, so aggregation only sees NormalizedLink.

DESIGN DECISION: Items are frozen. Editing helpers return new items.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ItemType(str, Enum):
    """
    Polarity of a balance sheet line item.

    Determines how income and expense transactions move its value.
    """
    ASSET = "asset"
    LIABILITY = "liability"


class ItemCategory(str, Enum):
    """Display grouping for a line item. Has no effect on valuation."""
    CASH = "cash"
    PROPERTY = "property"
    INVESTMENT = "investment"
    DEBT = "debt"
    OTHER = "other"


class GovernancePeriod(str, Enum):
    """
    Bucket size for a category cap.

    LIFETIME means no bucketing: every matching transaction in the
    snapshot is summed as one group.
    """
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    LIFETIME = "lifetime"


# =============================================================================
# CATEGORY GOVERNANCE
# =============================================================================

class CategoryLink(BaseModel):
    """
    Explicit governance rule for one ledger category, as configured.

    `cap` and `period` are optional here; defaults are applied by the
    normalizer, not by this model.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(
        ...,
        description="Ledger category this rule applies to"
    )
    cap: Optional[Decimal] = Field(
        default=None,
        description="Ceiling on positive accumulation per period (None = unlimited)"
    )
    period: Optional[GovernancePeriod] = Field(
        default=None,
        description="Bucket size for the cap (None = lifetime)"
    )


# Legacy shorthand: a bare category name means {name, cap: None, period: lifetime}
LinkedCategoryEntry = Union[str, CategoryLink]


class NormalizedLink(BaseModel):
    """
    Fully-specified governance rule, as consumed by aggregation.

    Invariants: `period` is never None and `cap` is either None or positive.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    cap: Optional[Decimal] = None
    period: GovernancePeriod = GovernancePeriod.LIFETIME

    @property
    def is_bucketed(self) -> bool:
        """True when contributions are capped per period bucket."""
        return self.cap is not None and self.period != GovernancePeriod.LIFETIME


def link_name(entry: LinkedCategoryEntry) -> str:
    """Category name of a link entry in either shape."""
    return entry if isinstance(entry, str) else entry.name


# =============================================================================
# LINE ITEMS
# =============================================================================

class BalanceSheetItem(BaseModel):
    """
    A declared asset or liability line item.

    If `is_calculated` is False, `value` is shown verbatim (manual entry).
    Otherwise the value is derived from the ledger: `initial_value` plus
    the governed contribution of every linked category, limited by
    `max_value` and floored at zero.

    Accepts camelCase keys (isCalculated, initialValue, linkedCategories,
    linkedKeywords, maxValue) as stored by the host editor.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique item ID"
    )
    name: str = Field(
        ...,
        description="Display name"
    )
    type: ItemType = Field(
        ...,
        description="Asset or liability"
    )
    category: ItemCategory = Field(
        default=ItemCategory.OTHER,
        description="Display grouping"
    )

    # Manual mode
    value: Optional[Decimal] = Field(
        default=None,
        description="Manually entered value (used only when not calculated)"
    )

    # Calculated mode
    is_calculated: bool = Field(
        default=False,
        description="Derive the value from the ledger"
    )
    initial_value: Optional[Decimal] = Field(
        default=None,
        description="Starting balance at the beginning of recorded history"
    )
    linked_categories: list[LinkedCategoryEntry] = Field(
        default_factory=list,
        description="Governance rules; transactions in these categories move the value"
    )
    linked_keywords: Optional[str] = Field(
        default=None,
        description="Comma-separated description filter applied to every linked category"
    )
    max_value: Optional[Decimal] = Field(
        default=None,
        description="Global ceiling on the calculated value (ignored unless > 0)"
    )

    def with_category(self, name: str) -> "BalanceSheetItem":
        """
        Return a copy with `name` appended as a legacy (uncapped) link.

        Adding a category that is already linked returns the item unchanged.
        """
        wanted = name.strip().lower()
        if any(link_name(entry).lower() == wanted for entry in self.linked_categories):
            return self
        return self.model_copy(
            update={"linked_categories": [*self.linked_categories, name.strip()]}
        )

    def with_category_config(
        self,
        index: int,
        cap: Optional[Decimal] = None,
        period: Optional[GovernancePeriod] = None,
    ) -> "BalanceSheetItem":
        """
        Return a copy with the link at `index` replaced by an explicit rule.

        A zero or missing cap is stored as unlimited.
        """
        links = list(self.linked_categories)
        links[index] = CategoryLink(
            name=link_name(links[index]),
            cap=cap if cap else None,
            period=period,
        )
        return self.model_copy(update={"linked_categories": links})

    def without_category(self, index: int) -> "BalanceSheetItem":
        """Return a copy with the link at `index` removed."""
        links = list(self.linked_categories)
        del links[index]
        return self.model_copy(update={"linked_categories": links})


# =============================================================================
# COMPUTED BALANCE SHEET
# =============================================================================

class ItemValuation(BaseModel):
    """The value of one line item at a snapshot."""

    item_id: str
    name: str
    type: ItemType
    category: ItemCategory = ItemCategory.OTHER
    is_calculated: bool = False
    value: Decimal = Field(
        ...,
        description="Value at the snapshot (never negative for calculated items)"
    )


class BalanceSheetReport(BaseModel):
    """
    A full balance sheet at one snapshot.

    Totals fold the derived cash position in: positive cash counts as an
    asset, negative cash as a liability.
    """

    snapshot: str = Field(
        ...,
        description="Snapshot as selected ('today', a year, or an ISO date)"
    )
    cutoff: Optional[str] = Field(
        default=None,
        description="Last included transaction date (None = no limit)"
    )
    generated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    correlation_id: Optional[UUID] = None

    valuations: list[ItemValuation] = Field(default_factory=list)

    cash_position: Decimal = Decimal("0")
    total_assets: Decimal = Decimal("0")
    total_liabilities: Decimal = Decimal("0")
    net_worth: Decimal = Decimal("0")

    def value_of(self, item_id: str) -> Optional[Decimal]:
        """Value of a single item, or None if it is not on this sheet."""
        for valuation in self.valuations:
            if valuation.item_id == item_id:
                return valuation.value
        return None

    def as_mapping(self) -> dict[str, Decimal]:
        """Item id -> value."""
        return {v.item_id: v.value for v in self.valuations}


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single configuration issue found."""

    item_id: Optional[str] = Field(
        default=None,
        description="Item the issue belongs to (None = ledger-level)"
    )
    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'duplicate', 'ignored_value', 'malformed_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ConfigValidationResult(BaseModel):
    """
    Result of checking item configuration against the ledger.

    Validation reports; it never rewrites the configuration.
    """

    validated_at: datetime = Field(
        default_factory=datetime.utcnow
    )
    item_count: int = Field(ge=0)

    is_valid: bool = Field(
        ...,
        description="No error-level issues"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    def issues_for(self, item_id: str) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.item_id == item_id]
