"""Use cases: stateless transformations from the current state to the next."""

from unistate.usecases.account import IncrementBalanceBy100, LoadUsername, SetBalance, UpdateBalance
from unistate.usecases.base import (
    AsyncUseCase,
    SyncUseCase,
    UseCaseKind,
    require_parameter,
    use_case_kind,
    use_case_name,
)
from unistate.usecases.single import Single

__all__ = [
    "AsyncUseCase",
    "IncrementBalanceBy100",
    "LoadUsername",
    "SetBalance",
    "Single",
    "SyncUseCase",
    "UpdateBalance",
    "UseCaseKind",
    "require_parameter",
    "use_case_kind",
    "use_case_name",
]
