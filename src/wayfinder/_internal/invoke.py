"""Invoke helper: call sync or async callbacks uniformly.

Handler callbacks can be ``def`` or ``async def``. The callback handler
wrapper and the adapter's lifecycle hooks go through this one helper so
the sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both flavours of callback::

        def plain(context):
            return Response("hello")

        async def fetched(context):
            return await backend.get(context.url.path)
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
