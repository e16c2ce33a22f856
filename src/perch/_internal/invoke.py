"""Invoke helpers — call sync or async handlers uniformly.

Perch handlers can be ``def`` or ``async def``. Any code that calls a
user-provided handler goes through ``invoke`` so the sync/async check
lives in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    result = await invoke(handler, view, emit)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
