"""Custom exception hierarchy for unistate."""

from __future__ import annotations


class UnistateError(Exception):
    """Base exception for all unistate errors."""


class UnistateConfigError(UnistateError):
    """Invalid or missing configuration."""


class UseCaseError(UnistateError):
    """A use case refused to produce a new state."""


class InvalidParametersError(UseCaseError):
    """A use case received no parameter, or the wrong parameter variant.

    ``expected`` describes what the use case wanted, e.g.
    ``"expected a balance value"``.
    """

    def __init__(self, expected: str | None = None) -> None:
        self.expected = expected
        super().__init__(expected or "invalid parameters")


class RepositoryError(UnistateError):
    """The persistence collaborator failed to save a value."""


class StoreClosedError(UnistateError):
    """A mutation was attempted on a store that has been closed."""
