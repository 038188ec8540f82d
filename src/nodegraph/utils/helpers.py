from __future__ import annotations

import inspect
from typing import Any, AsyncIterator, Awaitable, Union

MaybeAwaitable = Union[Any, Awaitable[Any]]


async def resolve(value: Any) -> Any:
    """
    Await ``value`` if it is awaitable, otherwise return it unchanged.
    """
    if inspect.isawaitable(value):
        return await value
    return value


async def iterate(source: Any) -> AsyncIterator[Any]:
    """
    Yield from a sync iterable, an async iterable, or an awaitable of
    either.
    """
    source = await resolve(source)
    if source is None:
        return
    if hasattr(source, "__aiter__"):
        async for item in source:
            yield item
        return
    for item in source:
        yield item


async def collect(source: Any) -> list:
    return [item async for item in iterate(source)]
