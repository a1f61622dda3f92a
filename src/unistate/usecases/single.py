"""Cold single-value asynchronous stream.

An asynchronous use case does not run its work when it is executed; it
returns a :class:`Single` describing the work. Nothing happens until a
consumer observes the single, either by awaiting :meth:`Single.run` or by
calling :meth:`Single.subscribe`. Observation yields exactly one value or
one error.

The work factory receives a *seed*: the value in effect at the moment
observation begins. The store seeds with its current state, which lets a
use case compute from the state at execution time instead of whatever was
current when it was applied.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Single(Generic[T]):
    """A lazily started computation that produces one ``T`` from a seed."""

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[T], Awaitable[T]]) -> None:
        self._factory = factory

    @classmethod
    def just(cls, value: T) -> Single[T]:
        """A single that ignores its seed and yields *value*."""

        async def _just(_seed: T) -> T:
            return value

        return cls(_just)

    @classmethod
    def fail(cls, error: BaseException) -> Single[T]:
        """A single that raises *error* once observed."""

        async def _fail(_seed: T) -> T:
            raise error

        return cls(_fail)

    def map(self, fn: Callable[[T], T]) -> Single[T]:
        """Return a single that applies *fn* to this single's value."""
        factory = self._factory

        async def _mapped(seed: T) -> T:
            return fn(await factory(seed))

        return Single(_mapped)

    async def run(self, seed: T) -> T:
        """Start the work and wait for its value."""
        return await self._factory(seed)

    def subscribe(
        self,
        seed: T,
        on_success: Callable[[T], None],
        on_error: Callable[[BaseException], None] | None = None,
    ) -> asyncio.Task[None]:
        """Observe the single on the running loop.

        Exactly one of *on_success* / *on_error* is called, unless the
        returned task is cancelled first, in which case neither is. Without
        *on_error*, failures are logged, as are failures of *on_success*.
        Callback references are released when the task finishes.
        """

        async def _observe() -> None:
            try:
                value = await self.run(seed)
            except Exception as exc:
                if on_error is None:
                    _logger.error("Unhandled error in single", exc_info=exc)
                else:
                    on_error(exc)
            else:
                try:
                    on_success(value)
                except Exception as exc:
                    _logger.error("Unhandled error in single success callback", exc_info=exc)

        return asyncio.get_running_loop().create_task(_observe())
