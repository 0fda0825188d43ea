#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from collections import deque
from inspect import Parameter, isawaitable, signature
from typing import TYPE_CHECKING, Any

from .lowlevel import (
    adopt,
    create_future,
    fail_future,
    is_future,
    on_settled,
    resolve_library,
    settle_future,
)
from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable, Iterable
    else:
        from typing import Callable, Iterable

    from .lowlevel._futures import AnyFuture

_POSITIONAL_KINDS = (
    Parameter.POSITIONAL_ONLY,
    Parameter.POSITIONAL_OR_KEYWORD,
)


def _count_positional(step: Callable[..., Any], /) -> int:
    try:
        parameters = signature(step).parameters.values()
    except (TypeError, ValueError):  # builtins without a signature
        return 2

    count = 0

    for parameter in parameters:
        if parameter.kind == Parameter.VAR_POSITIONAL:
            return 2

        if parameter.kind in _POSITIONAL_KINDS:
            count += 1

    return min(count, 2)


def _call_step(
    step: Callable[..., Any],
    previous: Any,
    state: dict[Any, Any],
    /,
) -> Any:
    count = _count_positional(step)

    if count == 0:
        return step()

    if count == 1:
        return step(previous)

    return step(previous, state)


def chain(
    steps: Iterable[Callable[..., Any]],
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Run future-producing *steps* one after another.

    Each step is called as ``step(previous, state)``, where *previous* is the
    result of the previous step (:data:`None` for the first one) and *state*
    is a :class:`dict` shared by all steps of this call. Steps that accept
    fewer positional parameters get only as many arguments. A step may return
    a plain value, a future or any other awaitable.

    The returned future is fulfilled with the result of the last step, or
    rejected with the first error: an exception raised by a step or a
    rejection of the future it returned. No step runs after an error.

    Example:
      .. code:: python

        result = await aiopromise.chain([
            lambda: aiopromise.delay(0.1, 23),
            lambda prev, state: state.update(first=prev) or prev + 2,
            lambda prev, state: {**state, "second": prev},
        ])
        assert result == {"first": 23, "second": 25}
    """

    library = resolve_library(library)

    pending = deque(steps)
    state = {}
    result = create_future(library=library)

    def _run(previous):
        # plain values are passed on in a loop instead of through futures,
        # so that long synchronous chains do not grow the stack
        while True:
            if result.done():  # cancelled by the caller
                return

            if not pending:
                settle_future(result, previous)
                return

            step = pending.popleft()

            try:
                value = _call_step(step, previous, state)

                if is_future(value) or isawaitable(value):
                    future = adopt(value, library=library)
                    break
            except Exception as exc:  # noqa: BLE001
                fail_future(result, exc)
                return

            previous = value

        on_settled(future, _run, _on_rejected)

    def _on_rejected(exc):
        pending.clear()
        fail_future(result, exc)

    _run(None)

    return result
