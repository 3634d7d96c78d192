"""
Abstract Storage Interface

DESIGN DECISION: Item configuration, the selected snapshot and the
starting cash balance belong to the HOST, not to the valuation engine.
The engine receives them as explicit parameters; this interface is how
the host flow reads and writes them. This allows us to:
1. Keep the engine free of implicit global state
2. Use in-memory storage for testing
3. Plug in any persistence backend without touching valuation logic

The interface is intentionally small - just the operations the flow needs.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from ledger_valuation.models.audit import AuditEvent
from ledger_valuation.models.balance_sheet import BalanceSheetItem


class BalanceSheetStoreInterface(ABC):
    """
    Abstract interface for balance sheet configuration storage.

    Item order is significant only for display.
    """

    @abstractmethod
    async def list_items(self) -> list[BalanceSheetItem]:
        """
        Return all configured items in display order.
        """
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> Optional[BalanceSheetItem]:
        """
        Retrieve an item by its ID.

        Returns:
            The item if found, None otherwise
        """
        pass

    @abstractmethod
    async def add_item(self, item: BalanceSheetItem) -> bool:
        """
        Append a new item.

        Raises:
            DuplicateError: If an item with the same id exists
        """
        pass

    @abstractmethod
    async def update_item(self, item: BalanceSheetItem) -> bool:
        """
        Replace an existing item, keeping its position.

        Raises:
            NotFoundError: If the item doesn't exist
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> bool:
        """
        Delete an item by ID.

        Returns:
            True if an item was removed
        """
        pass

    @abstractmethod
    async def replace_items(self, items: list[BalanceSheetItem]) -> None:
        """Replace the whole item list."""
        pass

    @abstractmethod
    async def get_starting_balance(self) -> Decimal:
        """Cash balance before the first recorded transaction."""
        pass

    @abstractmethod
    async def set_starting_balance(self, amount: Decimal) -> None:
        pass

    @abstractmethod
    async def get_snapshot(self) -> str:
        """Currently selected snapshot ('today', a year, or an ISO date)."""
        pass

    @abstractmethod
    async def set_snapshot(self, snapshot: str) -> None:
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
