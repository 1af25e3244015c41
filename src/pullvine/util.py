from __future__ import annotations

import inspect
from typing import Any, Awaitable, TypeVar

T = TypeVar("T")


async def resolve(value: T | Awaitable[T]) -> T:
    if inspect.isawaitable(value):
        return await value
    return value


def is_async_iterable(obj: Any) -> bool:
    return callable(getattr(type(obj), "__aiter__", None))


def is_async_iterator(obj: Any) -> bool:
    return is_async_iterable(obj) and callable(getattr(type(obj), "__anext__", None))


def is_iterable(obj: Any) -> bool:
    return callable(getattr(type(obj), "__iter__", None))
