"""Account use cases: load the user, set or update the balance."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import ClassVar, Literal

from unistate.models.parameters import BalanceParameter, UseCaseParameter
from unistate.models.state import AppState
from unistate.repository import BalanceRepository
from unistate.usecases.base import UseCaseKind, require_parameter
from unistate.usecases.single import Single


class LoadUsername:
    """Load the signed-in user's name into the state."""

    kind: ClassVar[Literal[UseCaseKind.SYNC]] = UseCaseKind.SYNC

    USERNAME: ClassVar[str] = "Oscar"

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> AppState:
        return AppState.derive(state, current_user=self.USERNAME)


class SetBalance:
    """Set the balance in place, without persisting it."""

    kind: ClassVar[Literal[UseCaseKind.SYNC]] = UseCaseKind.SYNC

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> AppState:
        balance = require_parameter(parameters, BalanceParameter, expected="expected a balance value")
        return AppState.derive(state, current_balance=balance.value)


@dataclass(frozen=True, slots=True)
class UpdateBalance:
    """Persist a new balance, then publish it.

    ``repository`` is optional; without one the balance is only published.
    """

    kind: ClassVar[Literal[UseCaseKind.ASYNC]] = UseCaseKind.ASYNC

    repository: BalanceRepository | None = None

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> Single[AppState]:
        balance = require_parameter(parameters, BalanceParameter, expected="expected a balance value")
        repository = self.repository

        async def _update(current: AppState) -> AppState:
            value = balance.value
            if repository is not None:
                value = await repository.save_balance(value)
            return AppState.derive(current, current_balance=value)

        return Single(_update)


class IncrementBalanceBy100:
    """Add 100 to whatever balance is current when the work starts."""

    kind: ClassVar[Literal[UseCaseKind.ASYNC]] = UseCaseKind.ASYNC

    AMOUNT: ClassVar[float] = 100.0

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> Single[AppState]:
        amount = self.AMOUNT

        async def _increment(current: AppState) -> AppState:
            await asyncio.sleep(0)
            return AppState.derive(current, current_balance=current.current_balance + amount)

        return Single(_increment)
