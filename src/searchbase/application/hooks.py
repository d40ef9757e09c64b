"""Application hooks – helpers for user-supplied sync or async callables."""
from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, TypeVar, Union

T = TypeVar("T")

#: A hook may be a plain function or a coroutine function.
Hook = Callable[..., Union[T, Awaitable[T]]]


async def call_hook(hook: Hook[T], *args: Any) -> T:
    """Call *hook* and await the result when it is awaitable."""
    result = hook(*args)
    if inspect.isawaitable(result):
        return await result
    return result


__all__ = ["Hook", "call_hook"]
