#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements the metaprogramming helpers the library is built on:
sentinel values for optional arguments, lazy per-library rebinding of
functions, and preparation of package namespaces for external use.
"""

from ._exports import (
    export as export,
)
from ._functions import (
    replaces as replaces,
)
from ._markers import (
    DEFAULT as DEFAULT,
    MISSING as MISSING,
    DefaultType as DefaultType,
    MissingType as MissingType,
)
