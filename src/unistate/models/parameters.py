"""Typed inputs for use cases.

A use case receives at most one :data:`UseCaseParameter`. The union is
closed and discriminated on ``kind``, so callers that build parameters from
plain data (a UI form, a JSON message) go through :func:`parse_parameter`
and get the right variant or an :class:`InvalidParametersError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, ValidationError

from unistate.exceptions import InvalidParametersError
from unistate.models._base import UnistateBaseModel


class BalanceParameter(UnistateBaseModel):
    """A new account balance."""

    kind: Literal["balance"] = "balance"
    value: float


class ExampleParameter(UnistateBaseModel):
    """Compound illustrative payload carrying a text and a number."""

    kind: Literal["example"] = "example"
    text: str
    number: int


UseCaseParameter = Annotated[BalanceParameter | ExampleParameter, Field(discriminator="kind")]

_PARAMETER_ADAPTER: TypeAdapter[UseCaseParameter] = TypeAdapter(UseCaseParameter)


def parse_parameter(data: Mapping[str, Any]) -> UseCaseParameter:
    """Validate *data* into the matching parameter variant.

    Raises
    ------
    InvalidParametersError
        When ``kind`` is missing or unknown, or the payload does not fit the
        selected variant.
    """
    try:
        return _PARAMETER_ADAPTER.validate_python(dict(data))
    except ValidationError as exc:
        raise InvalidParametersError(
            f"expected a 'balance' or 'example' parameter ({exc.error_count()} validation error(s))"
        ) from exc
