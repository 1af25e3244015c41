from __future__ import annotations

import logging
from enum import Enum, auto
from collections.abc import Mapping
from typing import Any, AsyncIterator, Iterable, Iterator, NamedTuple, TypeVar

from .util import is_async_iterable, is_async_iterator, is_iterable, resolve

T = TypeVar("T")

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    ASYNC = auto()     # natively async-iterable, passed through
    ITERABLE = auto()  # sync iterable, drawn one element per pull
    STEPPER = auto()   # object with a next() returning {value, done}


class InvalidSourceKind(TypeError):
    def __init__(self, source: Any) -> None:
        super().__init__(
            f"source of type {type(source).__name__!r} is neither iterable, "
            "async-iterable, nor a stepper with a next() method"
        )
        self.source = source


class Step(NamedTuple):
    value: Any = None
    done: bool = False


def classify(source: Any) -> SourceKind:
    if is_async_iterable(source):
        return SourceKind.ASYNC
    if is_iterable(source):
        return SourceKind.ITERABLE
    if callable(getattr(source, "next", None)):
        return SourceKind.STEPPER
    raise InvalidSourceKind(source)


def read_step(step: Any) -> Step:
    """
    Coerce whatever a stepper's next() produced into a Step.

    Accepted forms: Step, a mapping with "value"/"done" keys, an object with
    value/done attributes, or a plain (value, done) pair.
    """
    if isinstance(step, Step):
        return step
    if isinstance(step, Mapping):
        return Step(step.get("value"), bool(step.get("done", False)))
    if hasattr(step, "done"):
        return Step(getattr(step, "value", None), bool(step.done))
    if isinstance(step, tuple) and len(step) == 2:
        return Step(step[0], bool(step[1]))
    raise TypeError(f"stepper produced an unreadable step: {step!r}")


class IterPull(AsyncIterator[T]):
    '''
    async pull over a sync iterable
    '''

    def __init__(self, iterable: Iterable[T]) -> None:
        self._iterable = iterable
        self._it: Iterator[T] | None = None
        self._done = False

    def __aiter__(self) -> IterPull[T]:
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        try:
            if self._it is None:
                self._it = iter(self._iterable)
            return next(self._it)
        except StopIteration:
            self._done = True
            raise StopAsyncIteration from None
        except Exception:
            self._done = True
            raise


class StepperPull(AsyncIterator[T]):
    '''
    async pull over a raw stepper; calls next() until a step reports done
    '''

    def __init__(self, stepper: Any) -> None:
        self._stepper = stepper
        self._done = False

    def __aiter__(self) -> StepperPull[T]:
        return self

    async def __anext__(self) -> T:
        if self._done:
            raise StopAsyncIteration
        try:
            step = read_step(await resolve(self._stepper.next()))
        except Exception:
            self._done = True
            raise
        if step.done:
            self._done = True
            raise StopAsyncIteration
        return step.value


def normalize(source: Any) -> AsyncIterator[Any]:
    kind = classify(source)
    logger.debug("normalizing %s source %r", kind.name, type(source).__name__)

    if kind is SourceKind.ASYNC:
        if is_async_iterator(source):
            return source
        return aiter(source)
    if kind is SourceKind.ITERABLE:
        return IterPull(source)
    return StepperPull(source)
