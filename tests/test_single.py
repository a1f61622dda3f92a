from __future__ import annotations

import asyncio

import pytest

from unistate.usecases.single import Single


@pytest.mark.asyncio
async def test_work_does_not_start_until_observed() -> None:
    calls: list[int] = []

    async def _work(seed: int) -> int:
        calls.append(seed)
        return seed + 1

    single = Single(_work)
    await asyncio.sleep(0)
    assert calls == []

    assert await single.run(1) == 2
    assert calls == [1]


@pytest.mark.asyncio
async def test_each_observation_reruns_the_work() -> None:
    calls: list[int] = []

    async def _work(seed: int) -> int:
        calls.append(seed)
        return seed

    single = Single(_work)
    await single.run(1)
    await single.run(2)
    assert calls == [1, 2]


@pytest.mark.asyncio
async def test_just_fail_and_map() -> None:
    assert await Single.just(5).run(0) == 5
    assert await Single.just(5).map(lambda v: v * 2).run(0) == 10

    with pytest.raises(ValueError, match="boom"):
        await Single.fail(ValueError("boom")).run(0)


@pytest.mark.asyncio
async def test_subscribe_calls_on_success_once() -> None:
    values: list[int] = []
    errors: list[BaseException] = []

    task = Single.just(3).subscribe(0, values.append, errors.append)
    await task

    assert values == [3]
    assert errors == []


@pytest.mark.asyncio
async def test_subscribe_routes_errors_to_on_error() -> None:
    values: list[int] = []
    errors: list[BaseException] = []

    task = Single.fail(RuntimeError("nope")).subscribe(0, values.append, errors.append)
    await task

    assert values == []
    assert len(errors) == 1
    assert isinstance(errors[0], RuntimeError)


@pytest.mark.asyncio
async def test_subscribe_without_on_error_logs(caplog: pytest.LogCaptureFixture) -> None:
    task = Single.fail(RuntimeError("nope")).subscribe(0, lambda _v: None)
    await task

    assert task.exception() is None
    assert "Unhandled error in single" in caplog.text


@pytest.mark.asyncio
async def test_failing_on_success_is_logged_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    def _explode(_value: int) -> None:
        raise ValueError("render failed")

    errors: list[BaseException] = []
    task = Single.just(1).subscribe(0, _explode, errors.append)
    await task

    assert task.exception() is None
    assert errors == []
    assert "Unhandled error in single success callback" in caplog.text
    assert "render failed" in caplog.text


@pytest.mark.asyncio
async def test_cancelling_subscription_cancels_work() -> None:
    started = asyncio.Event()
    cancelled = asyncio.Event()
    values: list[int] = []
    errors: list[BaseException] = []

    async def _work(seed: int) -> int:
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return seed

    task = Single(_work).subscribe(0, values.append, errors.append)
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert cancelled.is_set()
    assert values == []
    assert errors == []
