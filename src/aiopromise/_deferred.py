#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import sys

from typing import TYPE_CHECKING, Any, Generic

from ._flag import Flag
from .lowlevel import create_future, fail_future, settle_future
from .meta import DEFAULT, DefaultType

if sys.version_info >= (3, 13):
    from typing import TypeVar
else:
    from typing_extensions import TypeVar

if TYPE_CHECKING:
    from .lowlevel._futures import AnyFuture

_T = TypeVar("_T", default=Any)


class Deferred(Generic[_T]):
    """
    A pending future together with the capability to settle it.

    Separates settlement from the code that created the future, so that it
    can be triggered from a timer callback, another thread or an external
    event. Only the first :meth:`resolve`/:meth:`reject` call has an effect.

    Example:
      >>> d = deferred(library='threading')
      >>> d.resolve(42)
      True
      >>> d.reject(ValueError())
      False
      >>> d.future.result()
      42
    """

    __slots__ = (
        "__weakref__",
        "_future",
        "_settled",
    )

    def __init__(self, /, *, library: str | DefaultType = DEFAULT) -> None:
        self._future = create_future(library=library)
        self._settled = Flag()

    def __repr__(self, /) -> str:
        cls = self.__class__
        cls_repr = f"{cls.__module__}.{cls.__qualname__}"

        if self._future.done():
            if self._future.cancelled():
                extra = "cancelled"
            elif self._future.exception() is not None:
                extra = "rejected"
            else:
                extra = "fulfilled"
        elif self._settled:
            extra = "settling"
        else:
            extra = "pending"

        return f"<{cls_repr} at {id(self):#x} [{extra}]>"

    def resolve(self, /, value: _T = None) -> bool:
        """
        Fulfill the future with *value*.

        Returns :data:`True` if this call settled the future, and
        :data:`False` if it was already settled (or cancelled).
        """

        if not self._settled.set():
            return False

        return settle_future(self._future, value)

    def reject(self, /, error: object) -> bool:
        """
        Reject the future with *error*.

        Non-exception values are wrapped into
        :exc:`~aiopromise.RejectionError`. Returns the same as
        :meth:`resolve`.
        """

        if not self._settled.set():
            return False

        return fail_future(self._future, error)

    def settled(self, /) -> bool:
        """
        Return :data:`True` if :meth:`resolve` or :meth:`reject` has won.
        """

        return bool(self._settled)

    @property
    def future(self, /) -> AnyFuture:
        """
        The future controlled by this handle.
        """

        return self._future


def deferred(*, library: str | DefaultType = DEFAULT) -> Deferred[Any]:
    """
    Create a :class:`Deferred` for the current (or given) library.
    """

    return Deferred(library=library)
