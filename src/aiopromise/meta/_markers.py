#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

from __future__ import annotations

import enum
import sys

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Final, NoReturn

if sys.version_info >= (3, 11):  # `EnumMeta` has been renamed to `EnumType`
    from enum import EnumType
else:
    from enum import EnumMeta as EnumType

if TYPE_CHECKING:
    if sys.version_info >= (3, 11):  # a caching bug fix
        from typing import Literal
    else:  # typing-extensions>=4.6.0
        from typing_extensions import Literal

    if sys.version_info >= (3, 11):  # python/cpython#90633
        from typing import Never
    else:  # typing-extensions>=4.1.0
        from typing_extensions import Never

if sys.version_info >= (3, 11):  # runtime introspection support
    from typing import final
else:  # typing-extensions>=4.1.0
    from typing_extensions import final

# Sentinels are enum members so that type checkers can narrow
# `value is MISSING` checks (see the "Support for singleton types in unions"
# section in PEP 484).


class _SingletonMeta(EnumType):
    # to allow `type(SINGLETON)() is SINGLETON`
    def __call__(cls, /, *args, **kwargs):
        if len(cls) != 1 or args or kwargs:
            return super().__call__(*args, **kwargs)

        return super().__call__(next(iter(cls)).value)


class SingletonEnum(enum.Enum, metaclass=_SingletonMeta):
    """
    A base class for type-checker-friendly singletons defined at the module
    level.

    Unlike :class:`enum.Enum`, it prohibits setting public attributes.

    Example:
      >>> class SingletonType(SingletonEnum):
      ...     SINGLETON = 'SINGLETON'
      >>> SINGLETON = SingletonType.SINGLETON
      >>> SingletonType() is SINGLETON
      True
      >>> SINGLETON.attr = 1
      Traceback (most recent call last):
      AttributeError: 'SingletonType' object has no attribute 'attr'
    """

    def __setattr__(self, /, name: str, value: object) -> None:
        if name.startswith("_") and name.endswith("_"):  # used by `enum.Enum`
            super().__setattr__(name, value)
            return

        cls_qualname = self.__class__.__qualname__

        msg = f"{cls_qualname!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __repr__(self, /) -> str:
        return f"{self.__class__.__module__}.{self._name_}"

    def __str__(self, /) -> str:  # overridden by `enum.Enum`
        return f"{self.__class__.__module__}.{self._name_}"

    def __reduce_ex__(self, /, protocol: object) -> str:
        # by name, so that `object()` values survive pickling before 3.12
        return self._name_


@final
class DefaultType(SingletonEnum):
    """
    A singleton class for :data:`DEFAULT`, the "detect it for me" value of
    keyword arguments such as ``library``.
    """

    DEFAULT = object()

    def __init_subclass__(cls, /, **kwargs: Never) -> NoReturn:
        bcs = __class__  # an implicit closure reference
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __bool__(self, /) -> Literal[False]:
        return False


@final
class MissingType(SingletonEnum):
    """
    A singleton class for :data:`MISSING`, the "not passed" value of optional
    positional parameters.
    """

    MISSING = object()

    def __init_subclass__(cls, /, **kwargs: Never) -> NoReturn:
        bcs = __class__  # an implicit closure reference
        bcs_repr = f"{bcs.__module__}.{bcs.__qualname__}"

        msg = f"type '{bcs_repr}' is not an acceptable base type"
        raise TypeError(msg)

    def __bool__(self, /) -> Literal[False]:
        return False


DEFAULT: Final[Literal[DefaultType.DEFAULT]] = DefaultType.DEFAULT
MISSING: Final[Literal[MissingType.MISSING]] = MissingType.MISSING
