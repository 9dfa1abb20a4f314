from typing import Any
from uuid import UUID

from pymongo.asynchronous.database import AsyncDatabase

from tabsession.core.core import Service
from tabsession.core.modules.balance.models import BalanceOperation, BalanceType


class BalanceService(Service):
    """Service for computing user balances from the operation ledger."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("balance_operations")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("recipient_id", 1), ("balance_type", 1)])

    async def record_operation(self, recipient_id: UUID, balance_type: BalanceType, amount: int) -> BalanceOperation:
        operation = BalanceOperation(balance_type=balance_type, recipient_id=recipient_id, amount=amount)
        await self._collection.insert_one(operation.to_mongo())
        return operation

    async def get_balance(self, recipient_id: UUID, balance_type: BalanceType) -> int:
        """Sum all operations of a type for a user, 0 when there are none."""
        cursor = self._collection.find({"recipient_id": recipient_id, "balance_type": balance_type})
        return sum([int(doc["amount"]) async for doc in cursor])
