"""Application state snapshot."""

from __future__ import annotations

from unistate.models._base import UnistateBaseModel


class AppState(UnistateBaseModel):
    """Immutable snapshot of all application data.

    A new snapshot is produced for every transition; the store replaces its
    reference and never mutates an instance in place.
    """

    current_user: str | None = None
    """Name of the signed-in user, if one has been loaded."""

    current_balance: float = 0.0
    """Account balance."""

    @classmethod
    def derive(
        cls,
        original: AppState | None = None,
        *,
        current_user: str | None = None,
        current_balance: float | None = None,
    ) -> AppState:
        """Build a snapshot from explicit overrides on top of *original*.

        Each field resolves as: explicit override, then the value held by
        *original*, then the field default. ``None`` means "not given", so an
        override cannot clear a field back to its default.
        """
        user = current_user
        if user is None and original is not None:
            user = original.current_user

        balance = current_balance
        if balance is None:
            balance = original.current_balance if original is not None else 0.0

        return cls(current_user=user, current_balance=balance)
