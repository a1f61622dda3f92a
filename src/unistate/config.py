"""Store configuration for unistate."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from unistate.exceptions import UnistateConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_timeout(value: str) -> float | None:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise UnistateConfigError(f"UNISTATE_ASYNC_TIMEOUT must be numeric, got {value!r}") from exc
    return timeout if timeout > 0 else None


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store behaviour switches.

    Parameters
    ----------
    serialize_async : bool
        Run asynchronous use cases one at a time, in the order they were
        applied. Each one is seeded with the state left by its predecessor.
    async_timeout : float or None
        Upper bound in seconds for a single asynchronous transition. A
        transition that exceeds it is reported as failed and not committed.
    replay_on_subscribe : bool
        Deliver the current state to a new subscriber immediately, before
        any later commit.
    skip_unchanged : bool
        Drop ``replace`` calls whose state equals the current one. Off by
        default: every replace produces exactly one notification.
    """

    serialize_async: bool = True
    async_timeout: float | None = None
    replay_on_subscribe: bool = False
    skip_unchanged: bool = False

    def __post_init__(self) -> None:
        if self.async_timeout is not None and self.async_timeout <= 0:
            raise UnistateConfigError("async_timeout must be positive or None")

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from ``UNISTATE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_BOOL_MAP = {
            "UNISTATE_SERIALIZE_ASYNC": ("serialize_async", True),
            "UNISTATE_REPLAY_ON_SUBSCRIBE": ("replay_on_subscribe", False),
            "UNISTATE_SKIP_UNCHANGED": ("skip_unchanged", False),
        }
        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        timeout_env = env.get("UNISTATE_ASYNC_TIMEOUT")
        if timeout_env is not None and "async_timeout" not in overrides:
            config_kwargs["async_timeout"] = _env_timeout(timeout_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
