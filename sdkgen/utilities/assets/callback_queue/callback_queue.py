from __future__ import annotations

import typing

import anyio

T = typing.TypeVar("T")


class CallbackQueue:
    """Runs awaited callbacks one at a time, in submission order."""

    def __init__(self) -> None:
        self._lock = anyio.Lock()

    async def run(self, callback: typing.Callable[[], typing.Awaitable[T]]) -> T:
        async with self._lock:
            return await callback()

    def wrap(
        self, callback: typing.Callable[..., typing.Awaitable[T]]
    ) -> typing.Callable[..., typing.Awaitable[T]]:
        async def wrapped(*args: typing.Any, **kwargs: typing.Any) -> T:
            return await self.run(lambda: callback(*args, **kwargs))

        return wrapped
