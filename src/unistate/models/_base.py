"""Base model for unistate value types.

Every value the store hands out inherits from :class:`UnistateBaseModel`,
which provides:

* ``frozen=True`` so instances can be shared with subscribers without
  defensive copies.
* ``extra="forbid"`` so a misspelled field fails at construction instead
  of being silently dropped.
* ``alias_generator=to_camel`` so snapshots dump with camelCase keys
  (``currentUser``) while Python code uses snake_case names.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UnistateBaseModel(BaseModel):
    """Immutable base for states and use-case parameters."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
