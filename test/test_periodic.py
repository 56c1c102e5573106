import asyncio

import pytest

from scheduling.periodic import PeriodicTask


def test_runs_until_stopped():
    calls = []

    async def scenario():
        task = PeriodicTask("tick", 0.01, lambda: calls.append(1))
        task.start()
        assert task.running
        await asyncio.sleep(0.08)
        await task.stop()
        assert not task.running
        stopped_at = len(calls)
        await asyncio.sleep(0.05)
        return stopped_at

    stopped_at = asyncio.run(scenario())
    assert stopped_at >= 2
    assert len(calls) == stopped_at


def test_failures_do_not_stop_the_loop():
    async def boom():
        raise RuntimeError("boom")

    async def scenario():
        task = PeriodicTask("boom", 0.01, boom, run_immediately=True)
        task.start()
        await asyncio.sleep(0.06)
        await task.stop()
        return task.runs

    assert asyncio.run(scenario()) >= 2


def test_stop_without_start_is_a_noop():
    asyncio.run(PeriodicTask("idle", 1, lambda: None).stop())


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicTask("bad", 0, lambda: None)
