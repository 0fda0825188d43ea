#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import os
import sys

from typing import TYPE_CHECKING, Any, Final

from ._exceptions import PromiseTimeoutError
from ._flag import Flag
from .lowlevel import (
    create_future,
    fail_future,
    resolve_library,
    schedule_after,
    schedule_repeating,
    settle_future,
)
from .meta import DEFAULT, MISSING, DefaultType

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

    from .lowlevel._futures import AnyFuture

POLL_INTERVAL: Final[float] = float(
    os.getenv("AIOPROMISE_POLL_INTERVAL") or 0.01
)


@overload
def wait_for(
    tester: Callable[[], Any],
    /,
    *,
    interval: float | DefaultType = DEFAULT,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture: ...
@overload
def wait_for(
    seconds: float | None,
    tester: Callable[[], Any],
    /,
    *,
    interval: float | DefaultType = DEFAULT,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture: ...
def wait_for(seconds, tester=MISSING, /, *, interval=DEFAULT, library=DEFAULT):
    """
    Poll *tester* until it returns a truthy value.

    Can be called as ``wait_for(tester)`` (no deadline) or as
    ``wait_for(seconds, tester)``. The tester is called every *interval*
    seconds (:data:`POLL_INTERVAL` by default), the first time after one
    interval.

    The returned future is fulfilled with the first truthy value, or
    rejected with the exception raised by *tester*, or rejected with
    :exc:`~aiopromise.PromiseTimeoutError` once *seconds* have passed. In
    each case polling stops: the tester is never called after settlement.

    Raises:
      TypeError:
        if *tester* is not callable.
      ValueError:
        if *interval* is not positive.
    """

    if tester is MISSING:
        seconds, tester = None, seconds

    if not callable(tester):
        msg = f"a callable tester was expected, got {tester!r}"
        raise TypeError(msg)

    if interval is DEFAULT:
        interval = POLL_INTERVAL

    library = resolve_library(library)

    result = create_future(library=library)
    done = Flag()
    handles = []

    def _stop():
        for handle in handles:
            handle.cancel()

    def _poll():
        if done:
            return

        try:
            value = tester()
        except Exception as exc:  # noqa: BLE001
            if done.set():
                _stop()
                fail_future(result, exc)
        else:
            if value and done.set():
                _stop()
                settle_future(result, value)

    def _on_deadline():
        if done.set():
            _stop()
            fail_future(
                result,
                PromiseTimeoutError("condition was not met in time"),
            )

    def _on_result_done(result):
        if result.cancelled() and done.set():
            _stop()

    handles.append(schedule_repeating(interval, _poll, library=library))

    if seconds is not None:
        handles.append(schedule_after(seconds, _on_deadline, library=library))

    if done:  # settled while the timers were being armed
        _stop()

    result.add_done_callback(_on_result_done)

    return result
