from __future__ import annotations

import asyncio
import os
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Any

_MAX_WORKERS = max(1, min(32, os.cpu_count() or 1))
# Tournament workers and event consumers never share threads, so a busy worker
# pool cannot starve an observer waiting on its progress queue.
_WORKERS = ThreadPoolExecutor(max_workers=_MAX_WORKERS, thread_name_prefix="holdembots-verify")
_CONSUMERS = ThreadPoolExecutor(max_workers=4, thread_name_prefix="holdembots-watch")


def submit(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future[Any]:
    return _WORKERS.submit(func, *args, **kwargs)


async def run_blocking(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
    loop = asyncio.get_running_loop()
    bound = partial(func, *args, **kwargs)
    return await loop.run_in_executor(_CONSUMERS, bound)
