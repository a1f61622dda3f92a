"""Single owner of the application state.

The store holds exactly one :class:`AppState` at a time and is the only
component allowed to replace it. Every commit fans out to subscribers in
registration order, and commits are delivered in the order they happened.

All mutation is expected to happen on one event loop (the owner loop).
Nothing here takes a lock around the state reference; code running on
other threads must go through :meth:`Store.replace_threadsafe`.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any, overload

from unistate.config import StoreConfig
from unistate.exceptions import StoreClosedError, UnistateError
from unistate.models.parameters import UseCaseParameter
from unistate.models.state import AppState
from unistate.state.subscription import StateCallback, Subscription
from unistate.usecases.base import AsyncUseCase, SyncUseCase, UseCaseKind, use_case_kind, use_case_name
from unistate.usecases.single import Single

_logger = logging.getLogger(__name__)

ErrorListener = Callable[[str, BaseException], None]


class Store:
    """Owns the current state and serializes transitions.

    Usage::

        store = Store()
        store.subscribe(render)
        store.apply(LoadUsername())
        await store.apply(UpdateBalance(), BalanceParameter(value=500))
    """

    def __init__(
        self,
        initial_state: AppState | None = None,
        *,
        config: StoreConfig | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._config = config or StoreConfig()
        self._state = initial_state if initial_state is not None else AppState()
        self._revision = 0
        self._loop = loop
        self._subscriptions: list[Subscription] = []
        self._outbox: deque[tuple[int, AppState]] = deque()
        self._delivering = False
        self._error_listeners: list[ErrorListener] = []
        self._async_lock: asyncio.Lock | None = None
        self._tasks: set[asyncio.Task[AppState | None]] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> Store:
        self._bind_loop(asyncio.get_running_loop())
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    def close(self) -> None:
        """Cancel in-flight async work and drop all subscribers."""
        if self._closed:
            return
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        for subscription in self._subscriptions:
            subscription._deactivate()  # noqa: SLF001
        self._subscriptions.clear()
        self._error_listeners.clear()
        self._outbox.clear()
        _logger.debug("Store closed at revision=%d", self._revision)

    async def aclose(self) -> None:
        """Close the store and wait for cancelled work to settle."""
        tasks = list(self._tasks)
        self.close()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def state(self) -> AppState:
        return self._state

    def current(self) -> AppState:
        """Return the state held right now."""
        return self._state

    @property
    def revision(self) -> int:
        """Number of commits so far."""
        return self._revision

    @property
    def config(self) -> StoreConfig:
        return self._config

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def replace(self, new_state: AppState) -> None:
        """Install *new_state* and notify every subscriber.

        A replace issued from inside a subscriber callback takes effect
        immediately, but its notification waits until the current fan-out
        has reached every subscriber.
        """
        self._ensure_open()
        if self._config.skip_unchanged and new_state == self._state:
            _logger.debug("Skipping unchanged state at revision=%d", self._revision)
            return

        self._state = new_state
        self._revision += 1
        _logger.debug("Committed revision=%d state=%s", self._revision, new_state)
        self._outbox.append((self._revision, new_state))
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._outbox:
                revision, state = self._outbox.popleft()
                self._fan_out(revision, state)
        except BaseException:
            # Queued commits must not leak into the next replace.
            self._outbox.clear()
            raise
        finally:
            self._delivering = False

    def replace_threadsafe(self, new_state: AppState) -> None:
        """Schedule :meth:`replace` on the owner loop from any thread."""
        if self._loop is None:
            raise UnistateError("Store is not bound to an event loop")
        self._loop.call_soon_threadsafe(self._replace_if_open, new_state)

    def _replace_if_open(self, new_state: AppState) -> None:
        if self._closed:
            _logger.debug("Dropping marshalled state; store is closed")
            return
        self.replace(new_state)

    def _fan_out(self, revision: int, state: AppState) -> None:
        for subscription in list(self._subscriptions):
            if not subscription.active or subscription.since_revision >= revision:
                continue
            self._deliver(subscription, state)

    @staticmethod
    def _deliver(subscription: Subscription, state: AppState) -> None:
        try:
            subscription.callback(state)
        except Exception:
            _logger.exception("Subscriber %r failed", subscription.callback)

    # ------------------------------------------------------------------
    # Use cases
    # ------------------------------------------------------------------

    @overload
    def apply(
        self,
        use_case: SyncUseCase,
        parameters: UseCaseParameter | None = None,
    ) -> None: ...

    @overload
    def apply(
        self,
        use_case: AsyncUseCase,
        parameters: UseCaseParameter | None = None,
    ) -> asyncio.Task[AppState | None]: ...

    def apply(
        self,
        use_case: SyncUseCase | AsyncUseCase,
        parameters: UseCaseParameter | None = None,
    ) -> asyncio.Task[AppState | None] | None:
        """Run *use_case* against the current state and commit its result.

        Synchronous use cases commit before this returns; their errors
        propagate and leave the state unchanged.

        Asynchronous use cases are executed immediately, so parameter
        errors still propagate, but their work is only scheduled. The
        returned task resolves to the committed state, or to ``None`` when
        the work failed. Those failures go to the error listeners and the
        log, never to the caller.
        """
        self._ensure_open()
        name = use_case_name(use_case)
        if use_case_kind(use_case) is UseCaseKind.SYNC:
            new_state = use_case.execute(self._state, parameters)
            if not isinstance(new_state, AppState):
                raise TypeError(f"{name}.execute returned {type(new_state).__name__}, expected AppState")
            self.replace(new_state)
            return None

        single = use_case.execute(self._state, parameters)
        if not isinstance(single, Single):
            raise TypeError(f"{name}.execute returned {type(single).__name__}, expected Single")
        return self._observe(name, single)

    def _observe(self, name: str, single: Single[AppState]) -> asyncio.Task[AppState | None]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise UnistateError(f"{name} is asynchronous and needs a running event loop") from exc
        lock = self._bind_loop(loop)

        task = loop.create_task(self._run_async(name, single, lock), name=f"unistate:{name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _bind_loop(self, loop: asyncio.AbstractEventLoop) -> asyncio.Lock:
        """Make *loop* the owner loop and return the lock that serializes on it.

        A store moves to a new loop only once its previous loop is closed
        and none of its work is still pending there.
        """
        if self._loop is not loop:
            if self._loop is not None and not (self._loop.is_closed() and not self._tasks):
                raise UnistateError("Store is bound to a different event loop")
            if self._loop is not None:
                _logger.debug("Rebinding store from closed loop at revision=%d", self._revision)
            self._loop = loop
            self._async_lock = None
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        return self._async_lock

    async def _run_async(self, name: str, single: Single[AppState], lock: asyncio.Lock) -> AppState | None:
        try:
            if self._config.serialize_async:
                async with lock:
                    return await self._commit_single(name, single)
            return await self._commit_single(name, single)
        except asyncio.CancelledError:
            _logger.debug("Async use case %s cancelled", name)
            raise
        except Exception as exc:
            self._report_async_error(name, exc)
            return None

    async def _commit_single(self, name: str, single: Single[AppState]) -> AppState | None:
        seed = self._state
        timeout = self._config.async_timeout
        if timeout is not None:
            new_state = await asyncio.wait_for(single.run(seed), timeout)
        else:
            new_state = await single.run(seed)

        if not isinstance(new_state, AppState):
            raise TypeError(f"{name} yielded {type(new_state).__name__}, expected AppState")
        if self._closed:
            _logger.debug("Discarding result of %s; store is closed", name)
            return None
        self.replace(new_state)
        return new_state

    @property
    def pending(self) -> int:
        """Number of asynchronous transitions still in flight."""
        return len(self._tasks)

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait until no asynchronous transition is in flight.

        Returns ``False`` if *timeout* elapsed first.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                return False
            await asyncio.wait(list(self._tasks), timeout=remaining)
        return True

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, on_state: StateCallback, *, replay: bool | None = None) -> Subscription:
        """Register *on_state* for every state committed from now on.

        With *replay* (default: ``config.replay_on_subscribe``) the current
        state is delivered once right away.
        """
        self._ensure_open()
        subscription = Subscription(callback=on_state, since_revision=self._revision, _store=self)
        self._subscriptions.append(subscription)
        _logger.debug("Subscribed %r at revision=%d", on_state, self._revision)

        if replay is None:
            replay = self._config.replay_on_subscribe
        if replay:
            self._deliver(subscription, self._state)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.unsubscribe()

    def _detach(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return
        _logger.debug("Unsubscribed %r", subscription.callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def add_error_listener(self, listener: ErrorListener) -> Callable[[], None]:
        """Receive ``(use_case_name, exception)`` for every failed async use case.

        Returns a function that removes the listener.
        """
        self._error_listeners.append(listener)

        def remove() -> None:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

        return remove

    def _report_async_error(self, name: str, exc: BaseException) -> None:
        _logger.error("Async use case %s failed; state left at revision=%d", name, self._revision, exc_info=exc)
        for listener in list(self._error_listeners):
            try:
                listener(name, exc)
            except Exception:
                _logger.debug("Error listener failed", exc_info=True)

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("Store is closed")
