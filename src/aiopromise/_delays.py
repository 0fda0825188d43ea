#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .lowlevel import (
    create_future,
    fail_future,
    resolve_library,
    schedule_after,
    settle_future,
)
from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    from .lowlevel._futures import AnyFuture


def _cancel_on_cancellation(future, handle, /):
    def _callback(future):
        if future.cancelled():
            handle.cancel()

    future.add_done_callback(_callback)


def delay(
    seconds: float,
    value: Any = None,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Return a future that is fulfilled with *value* after *seconds*.

    Negative durations are treated as zero. Cancelling the returned future
    cancels the underlying timer.
    """

    library = resolve_library(library)

    future = create_future(library=library)
    handle = schedule_after(
        seconds,
        settle_future,
        future,
        value,
        library=library,
    )

    _cancel_on_cancellation(future, handle)

    return future


def delay_reject(
    seconds: float,
    error: object,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Like :func:`delay`, but rejects with *error* instead.

    Non-exception values are wrapped into :exc:`~aiopromise.RejectionError`.
    """

    library = resolve_library(library)

    future = create_future(library=library)
    handle = schedule_after(
        seconds,
        fail_future,
        future,
        error,
        library=library,
    )

    _cancel_on_cancellation(future, handle)

    return future
