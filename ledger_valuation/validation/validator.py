"""
Item Configuration Validation

DESIGN DECISION: The valuation engine never rejects configuration. It
treats unset or non-positive caps as unlimited, ignores non-positive max
values, and skips malformed dates from period buckets. Those silent
interpretations are surfaced HERE, for the host to show to the user:

- ERRORS block saving an item (duplicate ids, missing name)
- WARNINGS describe values the engine will ignore or reinterpret
- INFO notes things that are legal but probably unintended

IMPORTANT: Validation NEVER silently fixes issues.
It reports them for human review.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from ledger_valuation.config import get_settings
from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    CategoryLink,
    ConfigValidationResult,
    ValidationIssue,
    link_name,
)
from ledger_valuation.models.ledger import Transaction
from ledger_valuation.valuation.rules import parse_date


class ItemConfigValidator:
    """
    Checks balance sheet item configuration, optionally against a ledger.

    Item checks run without a ledger; category coverage and date hygiene
    checks need the transactions.
    """

    def __init__(self, max_reasonable_value: Optional[float] = None):
        """
        Initialize validator.

        Args:
            max_reasonable_value: Amounts above this are flagged.
                                  Defaults to the valuation settings.
        """
        settings = get_settings().valuation
        if max_reasonable_value is None:
            max_reasonable_value = settings.max_reasonable_value
        self._max_reasonable = Decimal(str(max_reasonable_value))
        self._flag_unmatched = settings.flag_unmatched_categories

    def _validate_item(self, item: BalanceSheetItem) -> list[ValidationIssue]:
        """Checks that only need the item itself."""
        issues = []

        if not item.name:
            issues.append(ValidationIssue(
                item_id=item.id,
                field="name",
                issue_type="missing",
                message="Item name is required",
                severity="error",
                suggested_fix="Give the item a name",
            ))

        if not item.is_calculated:
            if item.linked_categories:
                issues.append(ValidationIssue(
                    item_id=item.id,
                    field="linked_categories",
                    issue_type="ignored_value",
                    message=f"'{item.name}' is a manual item; its linked categories are ignored",
                    severity="warning",
                    suggested_fix="Switch the item to calculated mode to use category links",
                ))
            if item.value is not None and item.value > self._max_reasonable:
                issues.append(self._suspicious(item, "value", item.value))
            return issues

        if not item.linked_categories:
            issues.append(ValidationIssue(
                item_id=item.id,
                field="linked_categories",
                issue_type="empty",
                message=f"'{item.name}' has no linked categories; its value is its initial value",
                severity="warning",
                suggested_fix="Link at least one ledger category",
            ))

        if item.initial_value is not None:
            if item.initial_value < 0:
                issues.append(ValidationIssue(
                    item_id=item.id,
                    field="initial_value",
                    issue_type="negative_value",
                    message=f"Initial value of '{item.name}' is negative ({item.initial_value})",
                    severity="warning",
                    suggested_fix="Please verify the starting balance",
                ))
            elif item.initial_value > self._max_reasonable:
                issues.append(self._suspicious(item, "initial_value", item.initial_value))

        if item.max_value is not None and item.max_value <= 0:
            issues.append(ValidationIssue(
                item_id=item.id,
                field="max_value",
                issue_type="ignored_value",
                message=f"Max value of '{item.name}' is not positive and will be ignored",
                severity="warning",
                suggested_fix="Clear the max value or set it above zero",
            ))

        issues.extend(self._validate_links(item))
        return issues

    def _validate_links(self, item: BalanceSheetItem) -> list[ValidationIssue]:
        issues = []
        names = Counter()

        for position, entry in enumerate(item.linked_categories):
            name = link_name(entry).strip()
            if not name:
                issues.append(ValidationIssue(
                    item_id=item.id,
                    field=f"linked_categories[{position}]",
                    issue_type="missing",
                    message=f"'{item.name}' has a category link without a name; it matches nothing",
                    severity="warning",
                    suggested_fix="Remove the empty link",
                ))
                continue
            names[name.lower()] += 1

            if isinstance(entry, CategoryLink) and entry.cap is not None and entry.cap <= 0:
                issues.append(ValidationIssue(
                    item_id=item.id,
                    field=f"linked_categories[{position}].cap",
                    issue_type="ignored_value",
                    message=f"Cap on '{name}' is not positive; the category is treated as unlimited",
                    severity="warning",
                    suggested_fix="Clear the cap or set it above zero",
                ))

        for name, count in names.items():
            if count > 1:
                issues.append(ValidationIssue(
                    item_id=item.id,
                    field="linked_categories",
                    issue_type="duplicate",
                    message=f"Category '{name}' is linked {count} times to '{item.name}' and counts {count} times",
                    severity="warning",
                    suggested_fix="Keep a single link per category",
                ))

        return issues

    def _validate_against_ledger(
        self,
        items: Sequence[BalanceSheetItem],
        transactions: Sequence[Transaction],
    ) -> list[ValidationIssue]:
        """Checks that need the ledger."""
        issues = []

        malformed = [t for t in transactions if parse_date(t.date) is None]
        if malformed:
            sample = ", ".join(repr(t.date) for t in malformed[:3])
            issues.append(ValidationIssue(
                field="date",
                issue_type="malformed_date",
                message=(
                    f"{len(malformed)} transaction(s) have unreadable dates ({sample}); "
                    "they are left out of monthly, quarterly and yearly caps"
                ),
                severity="warning",
                suggested_fix="Correct the dates in the ledger",
            ))

        if not self._flag_unmatched:
            return issues

        ledger_categories = {t.category.lower() for t in transactions if t.category}
        for item in items:
            if not item.is_calculated:
                continue
            for entry in item.linked_categories:
                name = link_name(entry).strip()
                if name and name.lower() not in ledger_categories:
                    issues.append(ValidationIssue(
                        item_id=item.id,
                        field="linked_categories",
                        issue_type="unmatched_category",
                        message=f"No transactions in category '{name}' (linked to '{item.name}')",
                        severity="info",
                    ))

        return issues

    def _suspicious(
        self,
        item: BalanceSheetItem,
        field: str,
        amount: Decimal,
    ) -> ValidationIssue:
        return ValidationIssue(
            item_id=item.id,
            field=field,
            issue_type="suspicious_value",
            message=f"{field} of '{item.name}' ({amount:,.2f}) seems unusually high",
            severity="warning",
            suggested_fix="Please verify this amount is correct",
        )

    def validate(
        self,
        items: Iterable[BalanceSheetItem],
        transactions: Optional[Iterable[Transaction]] = None,
    ) -> ConfigValidationResult:
        """
        Validate a set of items.

        Args:
            items: The items to check (ids must be unique across the set)
            transactions: Optional ledger for coverage and date checks

        Returns:
            ConfigValidationResult with all issues found
        """
        items = list(items)
        all_issues = []

        id_counts = Counter(item.id for item in items)
        for item_id, count in id_counts.items():
            if count > 1:
                all_issues.append(ValidationIssue(
                    item_id=item_id,
                    field="id",
                    issue_type="duplicate",
                    message=f"Item id '{item_id}' is used by {count} items",
                    severity="error",
                    suggested_fix="Give every item a unique id",
                ))

        for item in items:
            all_issues.extend(self._validate_item(item))

        if transactions is not None:
            all_issues.extend(self._validate_against_ledger(items, list(transactions)))

        warnings = [i.message for i in all_issues if i.severity == "warning"]

        return ConfigValidationResult(
            item_count=len(items),
            is_valid=not any(i.severity == "error" for i in all_issues),
            issues=all_issues,
            warnings=warnings,
        )

    def get_user_friendly_summary(
        self,
        result: ConfigValidationResult,
    ) -> str:
        """Generate a short text summary of validation results."""
        if result.is_valid and not result.warnings:
            return "All balance sheet items are configured correctly."

        lines = []

        if result.has_errors:
            lines.append("Some items cannot be saved:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     → {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please check the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
