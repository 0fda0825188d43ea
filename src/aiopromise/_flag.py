#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Generic

from .meta import MISSING, MissingType

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if sys.version_info >= (3, 11):
    from typing import overload
else:
    from typing_extensions import overload

if TYPE_CHECKING:
    if sys.version_info >= (3, 9):
        from collections.abc import Callable
    else:
        from typing import Callable

_T = TypeVar("_T", default=object)
_D = TypeVar("_D")


class Flag(Generic[_T]):
    """
    A thread-safe box that can be set exactly once.

    The first :meth:`set` call wins and stores its marker; every later call
    has no effect and reports that it lost. This makes a flag the explicit
    "done" guard of races such as :func:`aiopromise.timeout`: whoever sets
    the flag first is the only one allowed to settle the outcome.

    Example:
      >>> done = Flag()
      >>> done.set('timer')
      True
      >>> done.set('input')
      False
      >>> done.get()
      'timer'
    """

    __slots__ = (
        "__weakref__",
        "_markers",
    )

    def __init__(self, /, marker: _T | MissingType = MISSING) -> None:
        if marker is not MISSING:
            self._markers = [marker]
        else:
            self._markers = []

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        marker = MISSING

        if self._markers:
            try:
                marker = self._markers[0]
            except IndexError:
                pass

        if marker is MISSING:
            return f"{cls_repr}()"

        return f"{cls_repr}({marker!r})"

    def __bool__(self, /) -> bool:
        """
        Returns :data:`True` if the flag is set.
        """

        return bool(self._markers)

    @overload
    def get(
        self,
        /,
        default: _T | MissingType = MISSING,
        *,
        default_factory: MissingType = MISSING,
    ) -> _T: ...
    @overload
    def get(
        self,
        /,
        default: _D,
        *,
        default_factory: MissingType = MISSING,
    ) -> _T | _D: ...
    @overload
    def get(
        self,
        /,
        default: MissingType = MISSING,
        *,
        default_factory: Callable[[], _D],
    ) -> _T | _D: ...
    def get(self, /, default=MISSING, *, default_factory=MISSING):
        """
        Return the winning marker.

        Raises:
          LookupError:
            if the flag is unset and no default is given.
        """

        if self._markers:
            try:
                return self._markers[0]
            except IndexError:
                pass

        if default is not MISSING:
            return default

        if default_factory is not MISSING:
            return default_factory()

        raise LookupError(self)

    def set(self, /, marker: _T | MissingType = MISSING) -> bool:
        """
        Try to set the flag.

        Returns :data:`True` only for the call that actually set it. Without
        a marker, a unique anonymous one is used.
        """

        markers = self._markers

        if marker is MISSING:
            marker = object()

        if not markers:
            # list.append() is atomic, so concurrent setters all append, and
            # the first element decides the winner
            markers.append(marker)

            if len(markers) > 1:
                del markers[1:]

        try:
            return marker is markers[0]
        except IndexError:
            return False
