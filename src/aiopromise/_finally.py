#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from logging import Logger, getLogger
from typing import TYPE_CHECKING, Any, Final

from .lowlevel import (
    adopt,
    create_future,
    fail_future,
    on_settled,
    resolve_library,
    settle_future,
)
from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

    from .lowlevel._futures import AnyFuture

LOGGER: Final[Logger] = getLogger(__name__)


def promise_finally(
    awaitable: Any,
    cleanup: Callable[[], object],
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Call *cleanup* once *awaitable* settles, whatever the outcome.

    The returned future settles with the original outcome after *cleanup*
    has returned. An exception raised by *cleanup* is logged and never
    replaces the original value or error.
    """

    library = resolve_library(library)

    source = adopt(awaitable, library=library)
    result = create_future(library=library)

    def _cleanup():
        try:
            cleanup()
        except Exception:  # noqa: BLE001
            LOGGER.exception("exception calling cleanup %r", cleanup)

    def _on_fulfilled(value):
        _cleanup()
        settle_future(result, value)

    def _on_rejected(exc):
        _cleanup()
        fail_future(result, exc)

    on_settled(source, _on_fulfilled, _on_rejected)

    return result
