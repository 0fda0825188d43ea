#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

from typing import Any


class PromiseTimeoutError(TimeoutError):
    """
    Raised (as a rejection) when a deadline elapses before the awaited
    outcome.

    Used by :func:`aiopromise.timeout` and :func:`aiopromise.wait_for`.
    """


class RejectionError(Exception):
    """
    Carries a rejection reason that is not an exception.

    Futures can only be rejected with exceptions, so any other value passed
    to :meth:`Deferred.reject`, :func:`delay_reject` or an error-first
    callback is wrapped into this exception.

    Example:
      >>> exc = RejectionError('e')
      >>> exc.reason
      'e'
      >>> exc
      RejectionError('e')
    """

    def __init__(self, /, reason: Any) -> None:
        super().__init__(reason)

        self.reason = reason

    def __reduce__(self, /) -> tuple[Any, ...]:
        return (self.__class__, (self.reason,))
