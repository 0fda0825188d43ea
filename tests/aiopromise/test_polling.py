#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import asyncio
import time

import pytest

import aiopromise

EPSILON = 0.01


def _counting_tester(*values):
    calls = []

    def tester():
        calls.append(None)

        if len(calls) <= len(values):
            return values[len(calls) - 1]

        return values[-1]

    return tester, calls


def test_default_interval():
    assert aiopromise.POLL_INTERVAL == 0.01


def test_truthy_value():
    tester, calls = _counting_tester(False, False, 42)

    assert aiopromise.wait_for(tester).result(timeout=1) == 42

    time.sleep(0.05)

    # polling stops once the future is fulfilled
    assert len(calls) == 3


def test_with_deadline():
    tester, calls = _counting_tester(0, 7)

    assert aiopromise.wait_for(1, tester).result(timeout=1) == 7
    assert len(calls) == 2


def test_tester_raises():
    calls = []

    def tester():
        calls.append(None)

        raise ValueError("broken")

    future = aiopromise.wait_for(tester)

    with pytest.raises(ValueError, match="broken"):
        future.result(timeout=1)

    time.sleep(0.05)

    assert len(calls) == 1


def test_deadline():
    calls = []

    def tester():
        calls.append(None)

        return False

    start = time.monotonic()
    future = aiopromise.wait_for(0.02, tester)

    with pytest.raises(aiopromise.PromiseTimeoutError):
        future.result(timeout=1)

    assert time.monotonic() - start >= 0.02 - EPSILON

    count = len(calls)
    time.sleep(0.05)

    # no further invocations after the rejection
    assert len(calls) == count


def test_no_deadline_when_none():
    tester, calls = _counting_tester(False, "ok")

    assert aiopromise.wait_for(None, tester).result(timeout=1) == "ok"


def test_custom_interval():
    tester, calls = _counting_tester(False, True)

    start = time.monotonic()
    future = aiopromise.wait_for(tester, interval=0.03)

    assert future.result(timeout=1) is True
    assert time.monotonic() - start >= 0.05


def test_invalid_arguments():
    with pytest.raises(TypeError):
        aiopromise.wait_for(1, "not callable")

    with pytest.raises(ValueError):
        aiopromise.wait_for(lambda: True, interval=0)


def test_cancel_stops_polling():
    calls = []

    def tester():
        calls.append(None)

        return False

    future = aiopromise.wait_for(tester)

    time.sleep(0.03)

    assert future.cancel()

    count = len(calls)
    time.sleep(0.05)

    assert len(calls) <= count + 1


async def test_truthy_value_async():
    tester, calls = _counting_tester(None, "", 42)

    assert await aiopromise.wait_for(tester) == 42

    await asyncio.sleep(0.05)

    assert len(calls) == 3


async def test_deadline_async():
    calls = []

    def tester():
        calls.append(None)

        return False

    with pytest.raises(aiopromise.PromiseTimeoutError):
        await aiopromise.wait_for(0.02, tester)

    count = len(calls)
    await asyncio.sleep(0.05)

    assert len(calls) == count


async def test_condition_set_by_task_async():
    state = {}

    async def producer():
        await asyncio.sleep(0.02)

        state["ready"] = "yes"

    task = asyncio.ensure_future(producer())

    assert await aiopromise.wait_for(1, lambda: state.get("ready")) == "yes"

    await task
