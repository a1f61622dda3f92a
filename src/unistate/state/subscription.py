"""Subscriber registration handle."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from unistate.models.state import AppState

if TYPE_CHECKING:
    from unistate.state.store import Store

StateCallback = Callable[[AppState], None]


@dataclass(eq=False, slots=True)
class Subscription:
    """A live registration of a callback on a :class:`Store`.

    ``since_revision`` is the store revision at registration time; only
    commits with a higher revision are delivered.
    """

    callback: StateCallback
    since_revision: int
    _store: Store | None = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._store is not None

    def unsubscribe(self) -> None:
        """Stop delivery. Safe to call more than once."""
        store, self._store = self._store, None
        if store is not None:
            store._detach(self)  # noqa: SLF001

    def _deactivate(self) -> None:
        self._store = None

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.unsubscribe()
