#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any

from wrapt import decorator

from ._deferred import Deferred
from .lowlevel import adopt, is_future
from .meta import DEFAULT, DefaultType

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

    from .lowlevel._futures import AnyFuture


def _first_result(results: tuple[Any, ...], /) -> Any:
    if results:
        return results[0]

    return None


def _all_results(results: tuple[Any, ...], /) -> list[Any]:
    return list(results)


def _call_with_callback(
    wrapped: Callable[..., Any],
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    collect: Callable[[tuple[Any, ...]], Any],
    library: str | DefaultType,
    /,
) -> AnyFuture:
    handle = Deferred(library=library)

    def _callback(error=None, /, *results):
        if error:
            handle.reject(error)
        else:
            handle.resolve(collect(results))

    try:
        wrapped(*args, _callback, **kwargs)
    except Exception as exc:  # noqa: BLE001
        handle.reject(exc)

    return handle.future


def _adapter(
    collect: Callable[[tuple[Any, ...]], Any],
    library: str | DefaultType,
    /,
) -> Callable[..., Any]:
    @decorator
    def wrapper(wrapped, instance, args, kwargs):
        return _call_with_callback(wrapped, args, kwargs, collect, library)

    return wrapper


def convert_callback_fun(
    func: Callable[..., Any],
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> Callable[..., Any]:
    """
    Turn a function that reports its outcome through an error-first callback
    into one that returns a future.

    *func* must accept the callback as its last positional argument and call
    it as ``callback(error, result, ...)``. The future is rejected with a
    truthy *error*, and fulfilled with the first *result* otherwise (extra
    results are ignored). An exception raised by *func* itself also rejects
    the future. Each call of the returned function calls *func* exactly once.

    The returned function binds like *func*, so it can be used as a method.
    Its futures belong to *library*, detected on each call by default.

    Example:
      .. code:: python

        def read_config(path, callback):
            ...  # eventually calls callback(None, data) or callback(exc)

        read_config_async = aiopromise.convert_callback_fun(read_config)
        data = await read_config_async("settings.toml")
    """

    return _adapter(_first_result, library)(func)


def convert_callback_fun_with_many_args(
    func: Callable[..., Any],
    /,
    *,
    library: str | DefaultType = DEFAULT,
) -> Callable[..., Any]:
    """
    Like :func:`convert_callback_fun`, but the future is fulfilled with the
    :class:`list` of all result arguments passed to the callback.
    """

    return _adapter(_all_results, library)(func)


def _is_callback_style(obj: object, /) -> bool:
    return callable(obj) and not isinstance(obj, type) and not is_future(obj)


def promise(obj: Any, /, *, library: str | DefaultType = DEFAULT) -> Any:
    """
    Convert *obj* into a future, or a callback-style function into a
    future-returning one.

    If *obj* is a callable (other than a class), this is
    :func:`convert_callback_fun` and the result must still be called.
    Otherwise, the returned future adopts *obj*: a future or awaitable
    forwards its own settlement, and any other value is fulfilled
    immediately.

    Example:
      >>> promise('foo', library='threading').result()
      'foo'
      >>> def increment(value, callback):
      ...     callback(None, value + 1)
      >>> promise(increment)(3).result()
      4
    """

    if _is_callback_style(obj):
        return convert_callback_fun(obj, library=library)

    return adopt(obj, library=library)
