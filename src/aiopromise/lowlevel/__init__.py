#!/usr/bin/env python3

# SPDX-FileCopyrightText: 2025 Ilya Egorov <0x42005e1f@gmail.com>
# SPDX-License-Identifier: ISC

"""
This package implements the host primitives the combinators are built on:
detection of the running library, creation, settlement and adoption of its
futures, and one-shot/repeating timers.

You can use its contents to write your own combinators that work the same
way under asyncio and in plain threads.
"""

from ._futures import (
    adopt as adopt,
    as_exception as as_exception,
    create_future as create_future,
    fail_future as fail_future,
    is_future as is_future,
    on_settled as on_settled,
    rejected_future as rejected_future,
    resolved_future as resolved_future,
    settle_future as settle_future,
)
from ._libraries import (
    SUPPORTED_LIBRARIES as SUPPORTED_LIBRARIES,
    AsyncLibraryNotFoundError as AsyncLibraryNotFoundError,
    current_async_library as current_async_library,
    current_async_library_tlocal as current_async_library_tlocal,
    current_library as current_library,
    resolve_library as resolve_library,
)
from ._scheduler import (
    Handle as Handle,
    schedule_after as schedule_after,
    schedule_repeating as schedule_repeating,
)
