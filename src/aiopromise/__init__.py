#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
Composable combinators for single-resolution futures

This package lets you construct, combine, race, sequence and adapt futures
without hand-rolled callback bookkeeping:

* deferred handles that settle a future from the outside
* delays, deadlines (races) and condition polling
* sequential chains with a carried-over result and shared state
* finally-style cleanup that never masks the original outcome
* adapters for functions that report through error-first callbacks

The same functions work inside an asyncio event loop (on
:class:`asyncio.Future`) and in plain threads (on
:class:`concurrent.futures.Future`).
"""

from __future__ import annotations

__author__: str = "Ilya Egorov <0x42005e1f@gmail.com>"
__version__: str = "0.1.0"

from . import (  # noqa: F401
    lowlevel,
    meta,
)
from ._chain import (
    chain as chain,
)
from ._converters import (
    convert_callback_fun as convert_callback_fun,
    convert_callback_fun_with_many_args as convert_callback_fun_with_many_args,
    promise as promise,
)
from ._deferred import (
    Deferred as Deferred,
    deferred as deferred,
)
from ._delays import (
    delay as delay,
    delay_reject as delay_reject,
)
from ._exceptions import (
    PromiseTimeoutError as PromiseTimeoutError,
    RejectionError as RejectionError,
)
from ._finally import (
    promise_finally as promise_finally,
)
from ._flag import (
    Flag as Flag,
)
from ._polling import (
    POLL_INTERVAL as POLL_INTERVAL,
    wait_for as wait_for,
)
from ._timeouts import (
    timeout as timeout,
)

# prepare for external use
meta.export(globals())
