"""
Audit Logger

DESIGN DECISION: Every host-side action around the valuation engine is
logged. The logger:
- Always writes a structured local log (structlog)
- Optionally appends to an audit storage backend
- Gracefully handles storage failures (never crashes the flow)
- Supports correlation IDs to trace related events

The valuation engine logs through structlog directly; it never touches
the audit trail.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from ledger_valuation.config import get_settings
from ledger_valuation.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from ledger_valuation.services.storage import AuditStorageInterface


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    configure_root: bool = False,
) -> None:
    """
    Configure structlog on top of the stdlib logging module.

    Args:
        level: Minimum level name (DEBUG, INFO, ...)
        json_output: JSON lines if True, otherwise console-friendly output
        configure_root: Also install a stdlib handler and set the root
                        level. Only entry points should ask for this;
                        library imports leave the host's root logger alone.
    """
    if configure_root:
        logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
        logging.getLogger().setLevel(getattr(logging, level.upper()))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


_log_settings = get_settings().logging
configure_logging(_log_settings.level, _log_settings.json_output)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and user visibility)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_snapshot_selected(
        self,
        snapshot: str,
        cutoff: Optional[str],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.snapshot_selected(
            snapshot=snapshot,
            cutoff=cutoff,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_valuation_computed(
        self,
        snapshot: str,
        item_count: int,
        transaction_count: int,
        net_worth: Decimal,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.valuation_computed(
            snapshot=snapshot,
            item_count=item_count,
            transaction_count=transaction_count,
            net_worth=str(net_worth),
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_starting_balance_updated(
        self,
        amount: Decimal,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.starting_balance_updated(
            amount=str(amount),
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_item_saved(
        self,
        item_id: str,
        name: str,
        created: bool,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.item_saved(
            item_id=item_id,
            name=name,
            created=created,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_item_removed(
        self,
        item_id: str,
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.item_removed(
            item_id=item_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_config_validation_failed(
        self,
        item_id: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.config_validation_failed(
            item_id=item_id,
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a host action (e.g., recomputing the sheet).
    """
    return uuid4()
