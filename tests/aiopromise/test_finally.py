#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import logging

import pytest

import aiopromise
import aiopromise.lowlevel


def test_fulfilled():
    calls = []

    source = aiopromise.lowlevel.resolved_future(5)
    future = aiopromise.promise_finally(source, lambda: calls.append(None))

    assert future.result(timeout=1) == 5
    assert len(calls) == 1


def test_rejected():
    calls = []

    source = aiopromise.lowlevel.rejected_future(exc := ValueError("err"))
    future = aiopromise.promise_finally(source, lambda: calls.append(None))

    assert future.exception(timeout=1) is exc
    assert len(calls) == 1


def test_cleanup_runs_after_settlement():
    calls = []

    handle = aiopromise.deferred()
    future = aiopromise.promise_finally(
        handle.future,
        lambda: calls.append(handle.future.result()),
    )

    assert not calls

    handle.resolve("value")

    assert future.result(timeout=1) == "value"
    assert calls == ["value"]


def test_failing_cleanup_keeps_value(caplog):
    def cleanup():
        raise RuntimeError("cleanup failed")

    with caplog.at_level(logging.ERROR, logger="aiopromise"):
        future = aiopromise.promise_finally(aiopromise.delay(0.01, 5), cleanup)

        assert future.result(timeout=1) == 5

    assert "exception calling cleanup" in caplog.text
    assert "cleanup failed" in caplog.text


def test_failing_cleanup_keeps_error(caplog):
    def cleanup():
        raise RuntimeError("cleanup failed")

    source = aiopromise.delay_reject(0.01, exc := KeyError("original"))

    with caplog.at_level(logging.ERROR, logger="aiopromise"):
        future = aiopromise.promise_finally(source, cleanup)

        assert future.exception(timeout=1) is exc

    assert "cleanup failed" in caplog.text


def test_plain_value():
    calls = []

    future = aiopromise.promise_finally("x", lambda: calls.append(None))

    assert future.result(timeout=1) == "x"
    assert len(calls) == 1


async def test_fulfilled_async():
    calls = []

    source = aiopromise.lowlevel.resolved_future(5)
    future = aiopromise.promise_finally(source, lambda: calls.append(None))

    assert await future == 5
    assert len(calls) == 1


async def test_rejected_async():
    calls = []

    source = aiopromise.lowlevel.rejected_future(exc := ValueError("err"))
    future = aiopromise.promise_finally(source, lambda: calls.append(None))

    with pytest.raises(ValueError) as excinfo:
        await future

    assert excinfo.value is exc
    assert len(calls) == 1


async def test_coroutine_async():
    calls = []

    async def main():
        return "done"

    future = aiopromise.promise_finally(main(), lambda: calls.append(None))

    assert await future == "done"
    assert len(calls) == 1
