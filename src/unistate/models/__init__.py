"""Immutable value types: the application state and use-case parameters."""

from unistate.models._base import UnistateBaseModel
from unistate.models.parameters import (
    BalanceParameter,
    ExampleParameter,
    UseCaseParameter,
    parse_parameter,
)
from unistate.models.state import AppState

__all__ = [
    "AppState",
    "BalanceParameter",
    "ExampleParameter",
    "UnistateBaseModel",
    "UseCaseParameter",
    "parse_parameter",
]
