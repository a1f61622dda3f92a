"""unistate - Unidirectional state store with sync and async use cases."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("unistate")
except PackageNotFoundError:
    __version__ = "0+local"
from unistate.config import StoreConfig
from unistate.exceptions import (
    InvalidParametersError,
    RepositoryError,
    StoreClosedError,
    UnistateConfigError,
    UnistateError,
    UseCaseError,
)
from unistate.models import (
    AppState,
    BalanceParameter,
    ExampleParameter,
    UseCaseParameter,
    parse_parameter,
)
from unistate.repository import BalanceRepository, InMemoryBalanceRepository
from unistate.state import Store, Subscription
from unistate.usecases import (
    AsyncUseCase,
    IncrementBalanceBy100,
    LoadUsername,
    SetBalance,
    Single,
    SyncUseCase,
    UpdateBalance,
    UseCaseKind,
)

__all__ = [
    "__version__",
    "AppState",
    "AsyncUseCase",
    "BalanceParameter",
    "BalanceRepository",
    "ExampleParameter",
    "InMemoryBalanceRepository",
    "IncrementBalanceBy100",
    "InvalidParametersError",
    "LoadUsername",
    "RepositoryError",
    "SetBalance",
    "Single",
    "Store",
    "StoreClosedError",
    "StoreConfig",
    "Subscription",
    "SyncUseCase",
    "UnistateConfigError",
    "UnistateError",
    "UpdateBalance",
    "UseCaseError",
    "UseCaseKind",
    "UseCaseParameter",
    "parse_parameter",
]
