"""
In-Memory Storage Implementation

Keeps balance sheet configuration and the audit trail in process memory.
Used by tests and by hosts that own persistence themselves and only need
the flow's bookkeeping.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional
from uuid import UUID

from ledger_valuation.constants import DEFAULT_ITEMS
from ledger_valuation.models.audit import AuditEvent
from ledger_valuation.models.balance_sheet import BalanceSheetItem
from ledger_valuation.services.storage.interface import (
    AuditStorageInterface,
    BalanceSheetStoreInterface,
    DuplicateError,
    NotFoundError,
)
from ledger_valuation.valuation.engine import TODAY


class InMemoryBalanceSheetStore(BalanceSheetStoreInterface):
    """
    Balance sheet configuration held in a list.

    Seeded with DEFAULT_ITEMS unless `items` is given.
    """

    def __init__(
        self,
        items: Optional[Iterable[BalanceSheetItem]] = None,
        starting_balance: Decimal = Decimal("0"),
        snapshot: str = TODAY,
    ):
        self._items: list[BalanceSheetItem] = list(DEFAULT_ITEMS if items is None else items)
        self._starting_balance = Decimal(str(starting_balance))
        self._snapshot = snapshot

    def _position(self, item_id: str) -> Optional[int]:
        for position, item in enumerate(self._items):
            if item.id == item_id:
                return position
        return None

    async def list_items(self) -> list[BalanceSheetItem]:
        return list(self._items)

    async def get_item(self, item_id: str) -> Optional[BalanceSheetItem]:
        position = self._position(item_id)
        return None if position is None else self._items[position]

    async def add_item(self, item: BalanceSheetItem) -> bool:
        if self._position(item.id) is not None:
            raise DuplicateError(f"Item {item.id} already exists")
        self._items.append(item)
        return True

    async def update_item(self, item: BalanceSheetItem) -> bool:
        position = self._position(item.id)
        if position is None:
            raise NotFoundError(f"Item {item.id} not found")
        self._items[position] = item
        return True

    async def delete_item(self, item_id: str) -> bool:
        position = self._position(item_id)
        if position is None:
            return False
        del self._items[position]
        return True

    async def replace_items(self, items: list[BalanceSheetItem]) -> None:
        self._items = list(items)

    async def get_starting_balance(self) -> Decimal:
        return self._starting_balance

    async def set_starting_balance(self, amount: Decimal) -> None:
        self._starting_balance = Decimal(str(amount))

    async def get_snapshot(self) -> str:
        return self._snapshot

    async def set_snapshot(self, snapshot: str) -> None:
        self._snapshot = snapshot


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit trail held in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
