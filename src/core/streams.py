"""Cold single-value streams on top of asyncio.

A `Single` is a recipe, not a running computation: it holds a zero-argument
factory that produces an awaitable. Nothing happens until the stream is
consumed (`await single`, `single.run()` or `single.subscribe(...)`), and
every consumption calls the factory again, so the whole pipeline is
re-executed from scratch.

Operators:
- `map`: transform the emitted value.
- `flat_map`: derive a new `Single` from the emitted value and emit its value.
- `fork_join` / `fork_join_all`: run several sources concurrently and emit
  once all of them completed. The first failure to settle fails the join.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generator, Generic, Iterable, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class Single(Generic[T]):
    """Lazy, restartable producer of exactly one value (or one error)."""

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        self._factory = factory

    @classmethod
    def defer(cls, factory: Callable[[], Awaitable[T]]) -> "Single[T]":
        return cls(factory)

    @classmethod
    def of(cls, value: T) -> "Single[T]":
        async def _emit() -> T:
            return value

        return cls(_emit)

    @classmethod
    def error(cls, exc: BaseException) -> "Single[Any]":
        async def _fail() -> Any:
            raise exc

        return cls(_fail)

    def map(self, fn: Callable[[T], U]) -> "Single[U]":
        async def _mapped() -> U:
            return fn(await self._factory())

        return Single(_mapped)

    def flat_map(self, fn: Callable[[T], "Single[U]"]) -> "Single[U]":
        async def _switched() -> U:
            value = await self._factory()
            return await fn(value).run()

        return Single(_switched)

    async def run(self) -> T:
        """Execute the pipeline once and return its value."""

        return await self._factory()

    def __await__(self) -> Generator[Any, None, T]:
        return self.run().__await__()

    def subscribe(
        self,
        on_next: Callable[[T], None] | None = None,
        on_error: Callable[[BaseException], None] | None = None,
    ) -> "asyncio.Task[T]":
        """Start the pipeline as a task on the running loop.

        Callbacks fire when the task settles. The returned task can still be
        awaited; a cancelled task triggers neither callback.
        """

        task = asyncio.get_running_loop().create_task(self.run())

        def _deliver(done: "asyncio.Task[T]") -> None:
            if done.cancelled():
                return
            exc = done.exception()
            if exc is None:
                if on_next is not None:
                    on_next(done.result())
            elif on_error is not None:
                on_error(exc)

        task.add_done_callback(_deliver)
        return task


def fork_join_all(sources: Iterable[Single[T]]) -> Single[list[T]]:
    """Emit the values of all `sources`, in input order, once all completed."""

    pending = list(sources)

    async def _join() -> list[T]:
        if not pending:
            return []
        return list(await asyncio.gather(*(source.run() for source in pending)))

    return Single(_join)


def fork_join(*sources: Single[Any]) -> Single[tuple[Any, ...]]:
    """Like `fork_join_all` but for a fixed set of heterogeneous sources."""

    return fork_join_all(sources).map(tuple)
