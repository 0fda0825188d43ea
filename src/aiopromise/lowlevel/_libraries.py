#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Final, Literal

from sniffio import (
    AsyncLibraryNotFoundError as AsyncLibraryNotFoundError,
    thread_local,
)
from wrapt import when_imported

from aiopromise.meta import DEFAULT, DefaultType, replaces

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    from sniffio._impl import _ThreadLocal

SUPPORTED_LIBRARIES: Final[tuple[str, ...]] = ("asyncio", "threading")

current_async_library_tlocal: _ThreadLocal = thread_local


def _asyncio_running() -> bool:
    return False


@when_imported("asyncio")
def _(_):
    @replaces(globals())
    def _asyncio_running():
        # asyncio._get_running_loop() returns None instead of raising a
        # RuntimeError when there is no running loop, which is cheaper.

        from asyncio import _get_running_loop

        from sniffio import current_async_library_cvar

        @replaces(globals())
        def _asyncio_running():
            return (
                current_async_library_cvar.get() == "asyncio"
                or _get_running_loop() is not None
            )

        return _asyncio_running()


@overload
def current_async_library(*, failsafe: Literal[False] = False) -> str: ...
@overload
def current_async_library(*, failsafe: Literal[True]) -> str | None: ...
def current_async_library(*, failsafe=False):
    """
    Detect which async library is currently running.

    Args:
      failsafe:
        Unless set to :data:`True`, the function will raise an exception when
        there is no current async library. Otherwise the function returns
        :data:`None` in that case.

    Returns:
      A string like ``"asyncio"`` or :data:`None`.

    Raises:
      AsyncLibraryNotFoundError:
        if the current async library was not recognized.
    """

    if (name := current_async_library_tlocal.name) is not None:
        return name

    if _asyncio_running():
        return "asyncio"

    if failsafe:
        return None

    msg = "unknown async library, or not in async context"
    raise AsyncLibraryNotFoundError(msg)


def current_library() -> str:
    """
    Return the library whose futures and timers should be used in the
    current context: the running async library, or ``"threading"`` when
    there is none.
    """

    library = current_async_library(failsafe=True)

    if library is None:
        return "threading"

    return library


def resolve_library(library: str | DefaultType = DEFAULT, /) -> str:
    """
    Turn the ``library`` argument of a public operation into a library name.

    Raises:
      RuntimeError:
        if the library is not supported.
    """

    if library is DEFAULT:
        library = current_library()

    if library not in SUPPORTED_LIBRARIES:
        msg = f"unsupported library {library!r}"
        raise RuntimeError(msg)

    return library
