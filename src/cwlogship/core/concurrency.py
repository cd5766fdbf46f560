"""
Concurrency control for the flush path.

This module contains:
- BoundedPermit: counting permit with a bounded wait queue

Design:
- Async-first using asyncio primitives
- Waiters are admitted in FIFO order (asyncio.Semaphore semantics)
- Backpressure surfaces as ResourceExhaustedError once the wait queue is full
  instead of blocking forever
"""

from __future__ import annotations

import asyncio
import types

from .errors import ResourceExhaustedError

DEFAULT_MAX_WAITERS = 512


class BoundedPermit:
    """Counting permit whose wait queue has a fixed capacity.

    Usage:
        permit = BoundedPermit(1, max_waiters=512)
        async with permit:
            await do_exclusive_work()
    """

    def __init__(
        self,
        permits: int = 1,
        *,
        max_waiters: int = DEFAULT_MAX_WAITERS,
    ) -> None:
        if permits <= 0:
            raise ValueError("permits must be > 0")
        if max_waiters < 0:
            raise ValueError("max_waiters must be >= 0")
        self._permits = permits
        self._max_waiters = max_waiters
        self._semaphore = asyncio.Semaphore(permits)
        self._waiting = 0
        self._held = 0

    @property
    def permits(self) -> int:
        return self._permits

    @property
    def max_waiters(self) -> int:
        return self._max_waiters

    @property
    def waiting(self) -> int:
        """Number of acquirers currently suspended."""
        return self._waiting

    @property
    def held(self) -> int:
        return self._held

    def locked(self) -> bool:
        return self._held >= self._permits

    async def acquire(self) -> None:
        """Acquire a permit, waiting in line if none is free.

        Raises ResourceExhaustedError when ``max_waiters`` acquirers are
        already queued.
        """
        if self.locked() and self._waiting >= self._max_waiters:
            raise ResourceExhaustedError(
                f"permit wait queue is full ({self._max_waiters} waiting)"
            )
        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1
        self._held += 1

    def release(self) -> None:
        if self._held <= 0:
            raise RuntimeError("release() called without a held permit")
        self._held -= 1
        self._semaphore.release()

    async def __aenter__(self) -> BoundedPermit:
        await self.acquire()
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: types.TracebackType | None,
    ) -> None:
        self.release()
