#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import asyncio
import threading
import time

import pytest

import aiopromise.lowlevel


def test_schedule_after():
    event = threading.Event()
    calls = []

    def callback(*args):
        calls.append(args)
        event.set()

    handle = aiopromise.lowlevel.schedule_after(0.01, callback, 1, 2)

    assert event.wait(1)
    assert calls == [(1, 2)]
    assert not handle.cancelled()


def test_schedule_after_cancel():
    calls = []

    handle = aiopromise.lowlevel.schedule_after(0.02, calls.append, None)
    handle.cancel()

    time.sleep(0.05)

    assert handle.cancelled()
    assert not calls
    assert "[cancelled]" in repr(handle)


def test_schedule_repeating():
    calls = []
    event = threading.Event()

    def callback():
        calls.append(None)

        if len(calls) == 3:
            handle.cancel()
            event.set()

    handle = aiopromise.lowlevel.schedule_repeating(0.01, callback)

    assert event.wait(1)

    time.sleep(0.05)

    assert len(calls) == 3
    assert handle.cancelled()


def test_schedule_repeating_invalid_interval():
    with pytest.raises(ValueError):
        aiopromise.lowlevel.schedule_repeating(0, print)

    with pytest.raises(ValueError):
        aiopromise.lowlevel.schedule_repeating(-1, print)


async def test_schedule_after_async():
    future = asyncio.get_running_loop().create_future()

    aiopromise.lowlevel.schedule_after(0.01, future.set_result, "done")

    assert await future == "done"


async def test_schedule_after_negative_async():
    future = asyncio.get_running_loop().create_future()

    aiopromise.lowlevel.schedule_after(-5, future.set_result, "now")

    assert await asyncio.wait_for(future, 1) == "now"


async def test_schedule_repeating_async():
    calls = []
    future = asyncio.get_running_loop().create_future()

    def callback():
        calls.append(None)

        if len(calls) == 3:
            handle.cancel()
            future.set_result(None)

    handle = aiopromise.lowlevel.schedule_repeating(0.01, callback)

    await future
    await asyncio.sleep(0.05)

    assert len(calls) == 3
    assert handle.cancelled()
    assert "[cancelled]" in repr(handle)
