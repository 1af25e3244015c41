from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Awaitable, Callable, TypeAlias, TypeVar

from .source import IterPull
from .util import is_async_iterable, is_iterable, resolve

T = TypeVar("T")
U = TypeVar("U")

Mapper: TypeAlias = Callable[[Any], Any]
Predicate: TypeAlias = Callable[[Any], bool | Awaitable[bool]]

logger = logging.getLogger(__name__)


class StagePull(AsyncIterator[U], ABC):
    """
    A pull derived from an upstream pull plus one captured transform.

    Subclasses implement ``_advance``, which pulls from upstream as many times
    as it needs to produce exactly one item (or raises StopAsyncIteration).
    Once the stage has ended, by exhaustion or by a failure, every later pull
    reports exhaustion.
    """

    def __init__(self, upstream: AsyncIterator[Any], fn: Callable[[Any], Any]) -> None:
        self._upstream = upstream
        self._fn = fn
        self._done = False

    def __aiter__(self) -> StagePull[U]:
        return self

    async def __anext__(self) -> U:
        if self._done:
            raise StopAsyncIteration
        try:
            return await self._advance()
        except Exception:
            # StopAsyncIteration included
            self._done = True
            raise

    @abstractmethod
    async def _advance(self) -> U:
        ...

    async def _apply(self, item: Any) -> Any:
        try:
            return await resolve(self._fn(item))
        except StopAsyncIteration as e:
            # would otherwise read as end of stream
            raise RuntimeError(
                f"{self.__class__.__name__} transform raised StopAsyncIteration"
            ) from e


class MapPull(StagePull[U]):

    async def _advance(self) -> U:
        item = await anext(self._upstream)
        return await self._apply(item)


class FilterPull(StagePull[T]):

    async def _advance(self) -> T:
        while True:
            item = await anext(self._upstream)
            if await self._apply(item):
                return item


class FlatMapPull(StagePull[U]):
    """
    Drains each mapped sequence fully before pulling upstream again.

    A mapped result that is neither async-iterable nor iterable contributes
    no items.
    """

    def __init__(self, upstream: AsyncIterator[Any], fn: Callable[[Any], Any]) -> None:
        super().__init__(upstream, fn)
        self._inner: AsyncIterator[U] | None = None

    async def _advance(self) -> U:
        while True:
            if self._inner is not None:
                try:
                    return await anext(self._inner)
                except StopAsyncIteration:
                    self._inner = None

            item = await anext(self._upstream)
            mapped = await self._apply(item)
            if is_async_iterable(mapped):
                self._inner = aiter(mapped)
            elif is_iterable(mapped):
                self._inner = IterPull(mapped)
            else:
                logger.debug("flat_map skipped non-iterable result %r", mapped)
