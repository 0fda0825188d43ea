#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from functools import partial
from typing import TYPE_CHECKING, Any, Union

from aiopromise._exceptions import RejectionError
from aiopromise.meta import DEFAULT, DefaultType, replaces

from ._libraries import resolve_library

if TYPE_CHECKING:
    import asyncio
    import concurrent.futures

    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

    AnyFuture = Union[asyncio.Future[Any], concurrent.futures.Future[Any]]


def _isfuture(obj: object, /) -> bool:
    from asyncio import isfuture

    @replaces(globals())
    def _isfuture(obj, /):
        return isfuture(obj)

    return _isfuture(obj)


def _isthreadfuture(obj: object, /) -> bool:
    from concurrent.futures import Future

    @replaces(globals())
    def _isthreadfuture(obj, /):
        return isinstance(obj, Future)

    return _isthreadfuture(obj)


def is_future(obj: object, /) -> bool:
    """
    Return :data:`True` if *obj* is an :class:`asyncio.Future` (or a
    compatible object) or a :class:`concurrent.futures.Future`.
    """

    return _isfuture(obj) or _isthreadfuture(obj)


def as_exception(reason: object, /) -> BaseException:
    """
    Turn a rejection reason into something a future can be rejected with.

    Exceptions are returned as is, exception classes are instantiated, and
    any other value is wrapped into :exc:`RejectionError`.

    Example:
      >>> as_exception('e')
      RejectionError('e')
      >>> as_exception(KeyError)
      KeyError()
    """

    if isinstance(reason, BaseException):
        return reason

    if isinstance(reason, type) and issubclass(reason, BaseException):
        return reason()

    return RejectionError(reason)


def _asyncio_create_future() -> asyncio.Future[Any]:
    from asyncio import get_running_loop

    @replaces(globals())
    def _asyncio_create_future():
        return get_running_loop().create_future()

    return _asyncio_create_future()


def _threading_create_future() -> concurrent.futures.Future[Any]:
    from concurrent.futures import Future

    @replaces(globals())
    def _threading_create_future():
        return Future()

    return _threading_create_future()


def create_future(*, library: str | DefaultType = DEFAULT) -> AnyFuture:
    """
    Create a new pending future of the current (or given) library.

    Raises:
      RuntimeError:
        if the library is not supported, or if an asyncio future is
        requested outside of a running event loop.
    """

    library = resolve_library(library)

    if library == "asyncio":
        return _asyncio_create_future()

    return _threading_create_future()


def resolved_future(
    value: Any = None,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Create a future that is already fulfilled with *value*.
    """

    future = create_future(library=library)
    future.set_result(value)

    return future


def rejected_future(
    error: object,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Create a future that is already rejected with *error* (see
    :func:`as_exception`).
    """

    future = create_future(library=library)
    fail_future(future, error)

    return future


def _asyncio_settle_now(
    future: asyncio.Future[Any],
    value: Any,
    exception: BaseException | None,
    /,
) -> bool:
    if future.done():
        return False

    if exception is None:
        future.set_result(value)
    elif isinstance(exception, StopIteration):
        # asyncio futures refuse StopIteration, mirror what tasks do
        exc = RuntimeError("StopIteration interacts badly with futures")
        exc.__cause__ = exception
        future.set_exception(exc)
    else:
        future.set_exception(exception)

    return True


def _asyncio_settle(
    future: asyncio.Future[Any],
    value: Any,
    exception: BaseException | None,
    /,
) -> bool:
    from asyncio import _get_running_loop

    @replaces(globals())
    def _asyncio_settle(future, value, exception, /):
        loop = future.get_loop()

        if _get_running_loop() is loop:
            return _asyncio_settle_now(future, value, exception)

        if future.done():
            return False

        loop.call_soon_threadsafe(
            _asyncio_settle_now,
            future,
            value,
            exception,
        )

        return True

    return _asyncio_settle(future, value, exception)


def _threading_settle(
    future: concurrent.futures.Future[Any],
    value: Any,
    exception: BaseException | None,
    /,
) -> bool:
    from concurrent.futures import InvalidStateError

    @replaces(globals())
    def _threading_settle(future, value, exception, /):
        try:
            if exception is None:
                future.set_result(value)
            else:
                future.set_exception(exception)
        except InvalidStateError:  # already settled or cancelled
            return False

        return True

    return _threading_settle(future, value, exception)


def settle_future(future: AnyFuture, /, value: Any = None) -> bool:
    """
    Fulfill *future* with *value* unless it is already done.

    Can be called from any thread. Returns :data:`False` if the future was
    already done, so that repeated settlements are no-ops.
    """

    if _isfuture(future):
        return _asyncio_settle(future, value, None)

    return _threading_settle(future, value, None)


def fail_future(future: AnyFuture, /, error: object) -> bool:
    """
    Reject *future* with *error* (see :func:`as_exception`) unless it is
    already done.

    Can be called from any thread. Returns :data:`False` if the future was
    already done, so that repeated settlements are no-ops.
    """

    exception = as_exception(error)

    if _isfuture(future):
        return _asyncio_settle(future, None, exception)

    return _threading_settle(future, None, exception)


def _cancelled_error(future: AnyFuture, /) -> BaseException:
    if _isfuture(future):
        from asyncio import CancelledError
    else:
        from concurrent.futures import CancelledError

    return CancelledError()


def on_settled(
    future: AnyFuture,
    on_fulfilled: Callable[[Any], object],
    on_rejected: Callable[[BaseException], object],
    /,
) -> None:
    """
    Register a continuation on *future*.

    Exactly one of *on_fulfilled* (with the result) and *on_rejected* (with
    the exception) is called once the future is done. A cancelled future is
    reported to *on_rejected* as a ``CancelledError`` instance. Continuations
    of the same future run in registration order.
    """

    def _callback(future):
        if future.cancelled():
            on_rejected(_cancelled_error(future))
            return

        exception = future.exception()

        if exception is not None:
            on_rejected(exception)
        else:
            on_fulfilled(future.result())

    future.add_done_callback(_callback)


def _chain_future(source: AnyFuture, target: AnyFuture, /) -> AnyFuture:
    on_settled(
        source,
        partial(settle_future, target),
        partial(fail_future, target),
    )

    return target


def _asyncio_adopt(obj: object, /) -> asyncio.Future[Any]:
    from asyncio import ensure_future, get_running_loop, wrap_future
    from inspect import isawaitable

    @replaces(globals())
    def _asyncio_adopt(obj, /):
        loop = get_running_loop()

        if _isfuture(obj):
            if obj.get_loop() is loop:
                return obj

            # a future of another event loop
            return _chain_future(obj, loop.create_future())

        if _isthreadfuture(obj):
            return wrap_future(obj, loop=loop)

        if isawaitable(obj):
            return ensure_future(obj, loop=loop)

        future = loop.create_future()
        future.set_result(obj)

        return future

    return _asyncio_adopt(obj)


def _threading_adopt(obj: object, /) -> concurrent.futures.Future[Any]:
    from concurrent.futures import Future
    from inspect import isawaitable, iscoroutine

    @replaces(globals())
    def _threading_adopt(obj, /):
        if _isthreadfuture(obj):
            return obj

        if _isfuture(obj):
            return _chain_future(obj, Future())

        if isawaitable(obj):
            if iscoroutine(obj):
                obj.close()  # suppress the "never awaited" warning

            msg = (
                f"a future or a non-awaitable value was expected"
                f" outside of an event loop, got {obj!r}"
            )
            raise TypeError(msg)

        future = Future()
        future.set_result(obj)

        return future

    return _threading_adopt(obj)


def adopt(
    obj: object,
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> AnyFuture:
    """
    Normalize *obj* into a future of the current (or given) library.

    A future of that library is returned as is; a future of the other library
    is bridged into a new one; under asyncio, any other awaitable is
    scheduled as a task; any non-awaitable value becomes an already
    fulfilled future.

    Raises:
      TypeError:
        if *obj* is an awaitable that is not a future and no event loop is
        available to run it.
    """

    library = resolve_library(library)

    if library == "asyncio":
        return _asyncio_adopt(obj)

    return _threading_adopt(obj)
