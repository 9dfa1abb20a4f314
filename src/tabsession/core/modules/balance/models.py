"""Ledger of TabCoins and TabCash movements."""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from tabsession.core.db import MongoModel
from tabsession.utils import now


class BalanceType(StrEnum):
    """Currencies tracked per user."""

    TABCOIN = "user:tabcoin"
    TABCASH = "user:tabcash"


class BalanceOperation(MongoModel):
    """Single credit (positive) or debit (negative) to a user's balance.

    Indexed on (recipient_id, balance_type).
    """

    balance_type: BalanceType
    recipient_id: UUID
    amount: int
    created_at: datetime = Field(default_factory=now)
