#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import asyncio
import time

import pytest

import aiopromise


def test_timeout_first():
    future = aiopromise.timeout(0.01, aiopromise.delay(1, "late"))

    with pytest.raises(aiopromise.PromiseTimeoutError, match="timed out"):
        future.result(timeout=1)


def test_input_first():
    future = aiopromise.timeout(1, aiopromise.delay(0.01, "early"))

    assert future.result(timeout=1) == "early"


def test_input_rejected_first():
    source = aiopromise.delay_reject(0.01, exc := ValueError("bad"))
    future = aiopromise.timeout(1, source)

    assert future.exception(timeout=1) is exc


def test_plain_value():
    assert aiopromise.timeout(1, 42).result(timeout=1) == 42


def test_timeout_is_builtin_timeout():
    future = aiopromise.timeout(0, aiopromise.deferred().future)

    with pytest.raises(TimeoutError):
        future.result(timeout=1)


def test_loser_is_discarded():
    handle = aiopromise.deferred()
    future = aiopromise.timeout(0.01, handle.future)

    with pytest.raises(aiopromise.PromiseTimeoutError):
        future.result(timeout=1)

    # the input is abandoned, not cancelled
    assert handle.resolve("late")
    assert handle.future.result(timeout=1) == "late"

    with pytest.raises(aiopromise.PromiseTimeoutError):
        future.result(timeout=1)


def test_coroutine_outside_event_loop():
    async def main():
        return 42

    with pytest.raises(TypeError):
        aiopromise.timeout(1, main())


async def test_timeout_first_async():
    future = aiopromise.timeout(0.01, aiopromise.delay(1, "late"))

    with pytest.raises(aiopromise.PromiseTimeoutError):
        await future


async def test_input_first_async():
    loop = asyncio.get_running_loop()

    future = aiopromise.timeout(10, aiopromise.delay(0.01, "early"))

    assert await future == "early"

    await asyncio.sleep(0)

    # the deadline timer is cancelled once the input wins
    assert all(handle.cancelled() for handle in loop._scheduled)


async def test_coroutine_async():
    async def main():
        await asyncio.sleep(0.01)

        return "done"

    assert await aiopromise.timeout(1, main()) == "done"


async def test_slow_coroutine_async():
    finished = []

    async def main():
        await asyncio.sleep(0.05)

        finished.append(True)

    with pytest.raises(aiopromise.PromiseTimeoutError):
        await aiopromise.timeout(0.01, main())

    await asyncio.sleep(0.1)

    # abandoned, but still run to completion
    assert finished


async def test_thread_future_async():
    source = aiopromise.delay(0.01, "threaded", library="threading")

    assert await aiopromise.timeout(1, source) == "threaded"


def test_no_early_settlement():
    start = time.monotonic()
    future = aiopromise.timeout(0.05, aiopromise.deferred().future)

    assert future.exception(timeout=1) is not None
    assert time.monotonic() - start >= 0.04
