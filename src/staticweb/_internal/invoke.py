"""Call user callbacks that may be plain functions or coroutines."""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func*; await the result when it is awaitable."""
    result = func(*args, **kwargs)
    return await result if inspect.isawaitable(result) else result
