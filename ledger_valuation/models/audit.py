"""
Audit Models for Ledger Valuation

Every host-side action around the valuation engine (snapshot selection,
balance sheet computation, item configuration changes) is logged.
This provides:
1. Traceability of which configuration produced which figures
2. Debugging information when a value looks wrong
3. Ability to reconstruct when a snapshot or item changed

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
The pure valuation core does not emit audit events; only the flow does.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Snapshot / valuation
    SNAPSHOT_SELECTED = "snapshot_selected"
    VALUATION_COMPUTED = "valuation_computed"
    STARTING_BALANCE_UPDATED = "starting_balance_updated"

    # Item configuration
    ITEM_SAVED = "item_saved"
    ITEM_REMOVED = "item_removed"
    CONFIG_VALIDATION_FAILED = "config_validation_failed"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'item', 'balance_sheet', 'snapshot')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.snapshot_selected("2023", "2023-12-31", correlation_id)
        event = AuditEventBuilder.item_saved(item_id, name, created=True, correlation_id=cid)
    """

    @staticmethod
    def snapshot_selected(
        snapshot: str,
        cutoff: Optional[str],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SNAPSHOT_SELECTED,
            entity_type="snapshot",
            entity_id=snapshot,
            correlation_id=correlation_id,
            description=f"Snapshot selected: {snapshot}",
            details={
                "snapshot": snapshot,
                "cutoff": cutoff,
            },
            is_user_action=True,
        )

    @staticmethod
    def valuation_computed(
        snapshot: str,
        item_count: int,
        transaction_count: int,
        net_worth: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALUATION_COMPUTED,
            entity_type="balance_sheet",
            entity_id=snapshot,
            correlation_id=correlation_id,
            description=f"Balance sheet computed for {snapshot}: {item_count} items",
            details={
                "item_count": item_count,
                "transaction_count": transaction_count,
                "net_worth": net_worth,
            },
        )

    @staticmethod
    def starting_balance_updated(
        amount: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STARTING_BALANCE_UPDATED,
            entity_type="balance_sheet",
            correlation_id=correlation_id,
            description=f"Starting cash balance set to {amount}",
            details={"amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def item_saved(
        item_id: str,
        name: str,
        created: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        action = "Added" if created else "Updated"
        return AuditEvent(
            event_type=AuditEventType.ITEM_SAVED,
            entity_type="item",
            entity_id=item_id,
            correlation_id=correlation_id,
            description=f"{action} balance sheet item: {name}",
            details={
                "name": name,
                "created": created,
            },
            is_user_action=True,
        )

    @staticmethod
    def item_removed(
        item_id: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ITEM_REMOVED,
            entity_type="item",
            entity_id=item_id,
            correlation_id=correlation_id,
            description="Removed balance sheet item",
            is_user_action=True,
        )

    @staticmethod
    def config_validation_failed(
        item_id: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONFIG_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="item",
            entity_id=item_id,
            correlation_id=correlation_id,
            description=f"Item configuration rejected with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={"operation": operation},
            correlation_id=correlation_id,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
