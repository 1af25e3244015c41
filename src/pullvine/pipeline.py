from __future__ import annotations

import logging
import contextlib
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from .source import normalize
from .stage import FilterPull, FlatMapPull, MapPull, Mapper, Predicate
from .util import resolve

U = TypeVar("U")

logger = logging.getLogger(__name__)


@dataclass
class _Consumption:
    name: str
    consumed: int = 0


class Pipeline:

    '''
    lazy async pipeline over a single pull
    '''

    def __init__(self, source: Any, log: bool = False) -> None:
        self._pull: AsyncIterator[Any] = normalize(source)
        self.log = log

    @property
    def pull(self) -> AsyncIterator[Any]:
        return self._pull

    def __aiter__(self) -> AsyncIterator[Any]:
        return self._pull

    def __handle_log(self, msg: str, *args: Any) -> None:
        if self.log:
            logger.info(msg, *args)

    def _derive(self, pull: AsyncIterator[Any]) -> Pipeline:
        return Pipeline(pull, log=self.log)

    # ---- chain ----

    def map(self, mapper: Mapper) -> Pipeline:
        return self._derive(MapPull(self._pull, mapper))

    def flat_map(self, mapper: Mapper) -> Pipeline:
        return self._derive(FlatMapPull(self._pull, mapper))

    def filter(self, predicate: Predicate) -> Pipeline:
        return self._derive(FilterPull(self._pull, predicate))

    # ---- terminal ----

    @contextlib.asynccontextmanager
    async def _consume_scope(self, name: str) -> AsyncIterator[_Consumption]:
        run = _Consumption(name)
        self.__handle_log("%s: started", name)
        try:
            yield run
        except Exception as e:
            if self.log:
                logger.warning("%s: aborted after %d item(s): %r", name, run.consumed, e)
            raise
        self.__handle_log("%s: finished after %d item(s)", name, run.consumed)

    async def for_each(self, action: Callable[[Any], Awaitable[Any] | Any]) -> None:
        async with self._consume_scope("for_each") as run:
            async for item in self._pull:
                run.consumed += 1
                await resolve(action(item))

    async def to_array(self) -> list[Any]:
        result: list[Any] = []
        async with self._consume_scope("to_array") as run:
            async for item in self._pull:
                run.consumed += 1
                result.append(item)
        return result

    to_list = to_array

    async def reduce(self, reducer: Callable[[U, Any], Awaitable[U] | U], initial: U) -> U:
        accumulator = initial
        async with self._consume_scope("reduce") as run:
            async for item in self._pull:
                run.consumed += 1
                accumulator = await resolve(reducer(accumulator, item))
        return accumulator


def from_source(source: Any, log: bool = False) -> Pipeline:
    """Wrap any iterable, async iterable, or stepper in a Pipeline."""
    return Pipeline(source, log=log)
