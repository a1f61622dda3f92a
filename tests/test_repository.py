from __future__ import annotations

import pytest

from unistate.exceptions import RepositoryError
from unistate.repository import InMemoryBalanceRepository


@pytest.mark.asyncio
async def test_save_balance_records_values() -> None:
    repository = InMemoryBalanceRepository()

    assert await repository.save_balance(10) == 10
    assert await repository.save_balance(20.5) == 20.5
    assert repository.saved == [10, 20.5]


@pytest.mark.asyncio
async def test_fail_next_only_fails_once() -> None:
    repository = InMemoryBalanceRepository()
    repository.fail_next()

    with pytest.raises(RepositoryError):
        await repository.save_balance(1)
    assert await repository.save_balance(2) == 2
    assert repository.saved == [2]


@pytest.mark.asyncio
async def test_fail_next_with_custom_error() -> None:
    repository = InMemoryBalanceRepository(latency=0.001)
    repository.fail_next(ConnectionError("offline"))

    with pytest.raises(ConnectionError, match="offline"):
        await repository.save_balance(1)
    assert repository.saved == []
