#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ._exceptions import PromiseTimeoutError
from ._flag import Flag
from .lowlevel import (
    adopt,
    create_future,
    fail_future,
    on_settled,
    resolve_library,
    schedule_after,
    settle_future,
)
from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    from .lowlevel._futures import AnyFuture


def timeout(
    seconds: float,
    awaitable: Any,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Race *awaitable* against a deadline of *seconds*.

    The returned future settles like *awaitable* if it settles first, and
    rejects with :exc:`~aiopromise.PromiseTimeoutError` if the deadline
    comes first. The loser's outcome is discarded: a late *awaitable* keeps
    running to completion, it is abandoned rather than cancelled.

    Example:
      .. code:: python

        try:
            response = await aiopromise.timeout(5, fetch(url))
        except aiopromise.PromiseTimeoutError:
            response = None
    """

    library = resolve_library(library)

    source = adopt(awaitable, library=library)
    result = create_future(library=library)
    done = Flag()

    def _on_deadline():
        if done.set("deadline"):
            fail_future(result, PromiseTimeoutError("promise timed out"))

    handle = schedule_after(seconds, _on_deadline, library=library)

    def _on_fulfilled(value):
        if done.set("source"):
            handle.cancel()
            settle_future(result, value)

    def _on_rejected(exc):
        if done.set("source"):
            handle.cancel()
            fail_future(result, exc)

    def _on_result_done(result):
        if result.cancelled() and done.set("cancelled"):
            handle.cancel()

    on_settled(source, _on_fulfilled, _on_rejected)
    result.add_done_callback(_on_result_done)

    return result
