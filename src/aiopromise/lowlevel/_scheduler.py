#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Protocol

from aiopromise.meta import DEFAULT, DefaultType, replaces

from ._libraries import resolve_library

if TYPE_CHECKING:
    import asyncio

    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable


class Handle(Protocol):
    """
    A scheduled callback that can be cancelled.
    """

    __slots__ = ()

    def cancel(self, /) -> None:
        """
        Prevent any further invocation of the callback.

        Does nothing if the handle is already cancelled. An invocation that
        is already running is not interrupted.
        """

    def cancelled(self, /) -> bool:
        """
        Return :data:`True` if the handle was cancelled.
        """


class _AsyncioRepeatingHandle:
    __slots__ = (
        "__weakref__",
        "_args",
        "_callback",
        "_cancelled",
        "_handle",
        "_loop",
        "_seconds",
    )

    def __init__(
        self,
        /,
        loop: asyncio.AbstractEventLoop,
        seconds: float,
        callback: Callable[..., object],
        args: tuple[Any, ...],
    ) -> None:
        self._loop = loop
        self._seconds = seconds
        self._callback = callback
        self._args = args
        self._cancelled = False
        self._handle = loop.call_later(seconds, self._run)

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        extra = "cancelled" if self._cancelled else "active"

        return f"<{cls_repr} at {id(self):#x} [{extra}]>"

    def _run(self, /) -> None:
        if self._cancelled:
            return

        # re-arm first so that the callback can cancel the next invocation
        self._handle = self._loop.call_later(self._seconds, self._run)
        self._callback(*self._args)

    def cancel(self, /) -> None:
        self._cancelled = True
        self._handle.cancel()

    def cancelled(self, /) -> bool:
        return self._cancelled


class _ThreadingHandle:
    __slots__ = (
        "__weakref__",
        "_args",
        "_callback",
        "_repeating",
        "_seconds",
        "_stopped",
        "_thread",
    )

    def __init__(
        self,
        /,
        seconds: float,
        callback: Callable[..., object],
        args: tuple[Any, ...],
        *,
        repeating: bool,
    ) -> None:
        from threading import Event, Thread

        self._seconds = seconds
        self._callback = callback
        self._args = args
        self._repeating = repeating
        self._stopped = Event()
        self._thread = Thread(target=self._run, daemon=True)
        self._thread.start()

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self._stopped.is_set():
            extra = "cancelled"
        elif self._thread.is_alive():
            extra = "active"
        else:
            extra = "finished"

        return f"<{cls_repr} at {id(self):#x} [{extra}]>"

    def _run(self, /) -> None:
        if not self._repeating:
            if not self._stopped.wait(self._seconds):
                self._callback(*self._args)
        else:
            while not self._stopped.wait(self._seconds):
                self._callback(*self._args)

    def cancel(self, /) -> None:
        self._stopped.set()

    def cancelled(self, /) -> bool:
        return self._stopped.is_set()


def _asyncio_schedule_after(
    seconds: float,
    callback: Callable[..., object],
    args: tuple[Any, ...],
    /,
) -> Handle:
    from asyncio import get_running_loop

    @replaces(globals())
    def _asyncio_schedule_after(seconds, callback, args, /):
        return get_running_loop().call_later(seconds, callback, *args)

    return _asyncio_schedule_after(seconds, callback, args)


def _asyncio_schedule_repeating(
    seconds: float,
    callback: Callable[..., object],
    args: tuple[Any, ...],
    /,
) -> Handle:
    from asyncio import get_running_loop

    @replaces(globals())
    def _asyncio_schedule_repeating(seconds, callback, args, /):
        return _AsyncioRepeatingHandle(
            get_running_loop(),
            seconds,
            callback,
            args,
        )

    return _asyncio_schedule_repeating(seconds, callback, args)


def schedule_after(
    seconds: float,
    callback: Callable[..., object],
    /,
    *args: Any,
    library: str | DefaultType = DEFAULT,
) -> Handle:
    """
    Call ``callback(*args)`` once after *seconds*.

    Negative durations are treated as zero. Under asyncio, the callback runs
    on the event loop; under threading, it runs on a daemon thread.

    Returns:
      A handle that cancels the call.
    """

    library = resolve_library(library)
    seconds = max(0, seconds)

    if library == "asyncio":
        return _asyncio_schedule_after(seconds, callback, args)

    return _ThreadingHandle(seconds, callback, args, repeating=False)


def schedule_repeating(
    seconds: float,
    callback: Callable[..., object],
    /,
    *args: Any,
    library: str | DefaultType = DEFAULT,
) -> Handle:
    """
    Call ``callback(*args)`` every *seconds* until the returned handle is
    cancelled. The first call happens after one interval.

    Raises:
      ValueError:
        if *seconds* is not positive.
    """

    library = resolve_library(library)

    if seconds <= 0:
        msg = f"interval must be positive, got {seconds!r}"
        raise ValueError(msg)

    if library == "asyncio":
        return _asyncio_schedule_repeating(seconds, callback, args)

    return _ThreadingHandle(seconds, callback, args, repeating=True)
