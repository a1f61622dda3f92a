"""Persistence collaborator used by asynchronous use cases.

The store never talks to this layer. Only use cases do, and the store only
sees the state they eventually yield. :class:`InMemoryBalanceRepository` is
an illustrative mock: it waits for a configurable latency and performs the
write on a worker thread, the way a blocking client would be driven from an
event loop.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Protocol

from unistate.exceptions import RepositoryError

_logger = logging.getLogger(__name__)


class BalanceRepository(Protocol):
    async def save_balance(self, balance: float) -> float:
        """Persist *balance* and return the stored value."""
        ...


class InMemoryBalanceRepository:
    """Mock backing store for account balances."""

    def __init__(self, *, latency: float = 0.0) -> None:
        self._latency = latency
        self._lock = threading.Lock()
        self._saved: list[float] = []
        self._next_failure: BaseException | None = None

    @property
    def saved(self) -> list[float]:
        """Values persisted so far, oldest first."""
        with self._lock:
            return list(self._saved)

    def fail_next(self, exc: BaseException | None = None) -> None:
        """Make the next :meth:`save_balance` call raise *exc*.

        Defaults to a :class:`RepositoryError`.
        """
        self._next_failure = exc or RepositoryError("simulated save failure")

    async def save_balance(self, balance: float) -> float:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

        failure, self._next_failure = self._next_failure, None
        if failure is not None:
            _logger.debug("Simulated failure saving balance=%s", balance)
            raise failure

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._write, balance)

    def _write(self, balance: float) -> float:
        with self._lock:
            self._saved.append(balance)
        _logger.debug("Saved balance=%s on thread=%s", balance, threading.current_thread().name)
        return balance
