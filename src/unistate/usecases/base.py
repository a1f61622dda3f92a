"""Use-case capabilities.

A use case is a stateless object with an ``execute(state, parameters)``
method and a class-level ``kind`` tag. The tag tells the store which of the
two capabilities it implements:

* :attr:`UseCaseKind.SYNC` -- ``execute`` returns the new :class:`AppState`.
* :attr:`UseCaseKind.ASYNC` -- ``execute`` returns a cold
  :class:`~unistate.usecases.single.Single` that yields the new state once
  observed.

Dispatch is on the tag, not on a base class, so any object that carries a
``kind`` and an ``execute`` qualifies.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar, Literal, Protocol, TypeVar

from unistate.exceptions import InvalidParametersError
from unistate.models.parameters import BalanceParameter, ExampleParameter, UseCaseParameter
from unistate.models.state import AppState
from unistate.usecases.single import Single

P = TypeVar("P", BalanceParameter, ExampleParameter)


class UseCaseKind(StrEnum):
    SYNC = "sync"
    ASYNC = "async"


class SyncUseCase(Protocol):
    """Computes the next state immediately."""

    kind: ClassVar[Literal[UseCaseKind.SYNC]]

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> AppState: ...


class AsyncUseCase(Protocol):
    """Describes work that eventually yields the next state."""

    kind: ClassVar[Literal[UseCaseKind.ASYNC]]

    def execute(
        self,
        state: AppState,
        parameters: UseCaseParameter | None = None,
    ) -> Single[AppState]: ...


def use_case_kind(use_case: object) -> UseCaseKind:
    """Return the capability tag of *use_case*.

    Raises
    ------
    TypeError
        If the object carries no valid ``kind`` tag.
    """
    kind = getattr(use_case, "kind", None)
    if not isinstance(kind, UseCaseKind):
        raise TypeError(f"{use_case_name(use_case)} is not a use case (missing UseCaseKind tag)")
    return kind


def use_case_name(use_case: object) -> str:
    """Human-readable name for logs."""
    if isinstance(use_case, type):
        return use_case.__name__
    return type(use_case).__name__


def require_parameter(
    parameters: UseCaseParameter | None,
    expected_type: type[P],
    *,
    expected: str,
) -> P:
    """Return *parameters* narrowed to *expected_type*.

    Raises
    ------
    InvalidParametersError
        ``"expected a parameter"`` when nothing was passed, *expected* when
        a different variant was passed.
    """
    if parameters is None:
        raise InvalidParametersError("expected a parameter")
    if not isinstance(parameters, expected_type):
        raise InvalidParametersError(expected)
    return parameters
