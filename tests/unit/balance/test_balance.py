"""Tests for balance computation."""

from uuid import uuid4

from tabsession.core.modules.balance.models import BalanceType


class TestGetBalance:
    async def test_no_operations_is_zero(self, services):
        assert await services.balance.get_balance(uuid4(), BalanceType.TABCOIN) == 0
        assert await services.balance.get_balance(uuid4(), BalanceType.TABCASH) == 0

    async def test_sums_operations_per_type(self, services):
        user_id = uuid4()
        await services.balance.record_operation(user_id, BalanceType.TABCOIN, 5)
        await services.balance.record_operation(user_id, BalanceType.TABCOIN, -2)
        await services.balance.record_operation(user_id, BalanceType.TABCASH, 7)

        assert await services.balance.get_balance(user_id, BalanceType.TABCOIN) == 3
        assert await services.balance.get_balance(user_id, BalanceType.TABCASH) == 7

    async def test_other_users_not_counted(self, services):
        await services.balance.record_operation(uuid4(), BalanceType.TABCOIN, 10)
        assert await services.balance.get_balance(uuid4(), BalanceType.TABCOIN) == 0
