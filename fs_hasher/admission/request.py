"""Hash requests submitted to the admission controller."""

from __future__ import annotations

import asyncio
import os

from fs_hasher.core.types import HashResult


class HashRequest:
    """One file to hash with one algorithm.

    The request completes exactly once with a :class:`HashResult`;
    ``wait()`` suspends until then.
    """

    def __init__(self, source: str, algorithm: str) -> None:
        if isinstance(source, os.PathLike):
            source = os.fspath(source)
        if not isinstance(source, str) or not source:
            raise ValueError("source must be a non-empty string")
        if not isinstance(algorithm, str) or not algorithm:
            raise ValueError("algorithm must be a non-empty string")
        self.source = source
        self.algorithm = algorithm
        self.pending = False
        self.dequeue_count = 0
        self._future: asyncio.Future[HashResult] | None = None

    def __repr__(self) -> str:
        return (
            f"HashRequest(source={self.source!r}, algorithm={self.algorithm!r}, "
            f"pending={self.pending}, dequeue_count={self.dequeue_count})"
        )

    @property
    def retries(self) -> int:
        return max(0, self.dequeue_count - 1)

    @property
    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def _attach(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._future is None:
            self._future = loop.create_future()

    def _complete(self, result: HashResult) -> None:
        if self._future is not None and not self._future.done():
            self._future.set_result(result)

    def _cancel(self) -> None:
        if self._future is not None and not self._future.done():
            self._future.cancel()

    async def wait(self) -> HashResult:
        if self._future is None:
            raise RuntimeError("request has not been submitted")
        return await self._future
