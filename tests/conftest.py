#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: 0BSD

import asyncio
import inspect
import sys
import threading

from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import wraps

import pytest

if sys.version_info >= (3, 11):
    WaitTimeout = TimeoutError
else:
    from concurrent.futures import TimeoutError as WaitTimeout


def _asyncio_decorator(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        return asyncio.run(func(*args, **kwargs))

    return wrapper


@pytest.fixture
def test_thread_safety():
    def _impl(*functions, repeat=1000):
        barrier = threading.Barrier(len(functions))

        def _worker(func):
            barrier.wait()

            for _ in range(repeat):
                func()

        interval = sys.getswitchinterval()
        sys.setswitchinterval(min(1e-6, interval))

        try:
            with ThreadPoolExecutor(len(functions)) as executor:
                futures = [executor.submit(_worker, f) for f in functions]

                try:
                    for future in as_completed(futures, timeout=6):
                        future.result()  # reraise
                except WaitTimeout:
                    pytest.fail("thread-safety test timed out")
        finally:
            sys.setswitchinterval(interval)

    return _impl


def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "threadsafe: mark test as thread-safety test",
    )


def pytest_collection_modifyitems(config, items):
    for item in items:
        # async tests run on a fresh asyncio event loop, sync tests run
        # without one and therefore exercise the threading backend
        if inspect.iscoroutinefunction(item.obj):
            item.obj = _asyncio_decorator(item.obj)

        if "test_thread_safety" in item.fixturenames:
            item.add_marker(pytest.mark.threadsafe)
