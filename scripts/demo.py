#!/usr/bin/env python3
"""Console walkthrough of the unistate store.

Stands in for a UI: a subscriber prints every committed state, and the
script fires use cases the way button handlers would.

Sequence:
1) LoadUsername (sync),
2) UpdateBalance(500) (async, persisted through the mock repository),
3) IncrementBalanceBy100 three times, back to back,
4) UpdateBalance with the wrong parameter variant (rejected),
5) optionally, an UpdateBalance whose save fails (reported, not raised).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from unistate import (  # noqa: E402
    AppState,
    BalanceParameter,
    ExampleParameter,
    IncrementBalanceBy100,
    InMemoryBalanceRepository,
    InvalidParametersError,
    LoadUsername,
    Store,
    StoreConfig,
    UpdateBalance,
)

_LOG = logging.getLogger("unistate_demo")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay the reference account scenario against a Store.")
    parser.add_argument(
        "--latency",
        type=float,
        default=0.05,
        help="Simulated repository latency in seconds (default: 0.05)",
    )
    parser.add_argument(
        "--fail-save",
        action="store_true",
        help="Finish with an UpdateBalance whose save fails",
    )
    parser.add_argument(
        "--replay",
        action="store_true",
        help="Deliver the initial state to the subscriber on registration",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def _render(state: AppState) -> None:
    user = state.current_user or "-"
    print(f"[view] user={user} balance={state.current_balance:.2f}")


async def _run(args: argparse.Namespace) -> int:
    repository = InMemoryBalanceRepository(latency=args.latency)
    update_balance = UpdateBalance(repository=repository)
    config = StoreConfig.from_env(replay_on_subscribe=args.replay)

    async with Store(config=config) as store:
        store.add_error_listener(lambda name, exc: print(f"[diag] {name} failed: {exc}"))
        store.subscribe(_render)

        store.apply(LoadUsername())
        await store.apply(update_balance, BalanceParameter(value=500))

        increment = IncrementBalanceBy100()
        for _ in range(3):
            store.apply(increment)
        await store.wait_idle()

        try:
            store.apply(update_balance, ExampleParameter(text="not a balance", number=1))
        except InvalidParametersError as exc:
            print(f"[demo] rejected: {exc.expected}")

        if args.fail_save:
            repository.fail_next()
            await store.apply(update_balance, BalanceParameter(value=0))

        final = store.current()
        print(f"[demo] final state: {final.model_dump(by_alias=True)}")
        print(f"[demo] repository saved: {repository.saved}")
    return 0


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _LOG.debug("Starting demo with latency=%s", args.latency)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(_main())
