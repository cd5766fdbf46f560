import asyncio

import pytest

from cwlogship.core.concurrency import BoundedPermit
from cwlogship.core.errors import ResourceExhaustedError


def test_permit_rejects_invalid_arguments() -> None:
    with pytest.raises(ValueError, match="permits must be > 0"):
        BoundedPermit(0)
    with pytest.raises(ValueError, match="max_waiters must be >= 0"):
        BoundedPermit(1, max_waiters=-1)


@pytest.mark.asyncio
async def test_permit_context_manager_releases_on_error() -> None:
    permit = BoundedPermit(1)

    with pytest.raises(RuntimeError, match="boom"):
        async with permit:
            assert permit.locked()
            raise RuntimeError("boom")

    assert permit.held == 0
    assert not permit.locked()


@pytest.mark.asyncio
async def test_release_without_acquire_raises() -> None:
    permit = BoundedPermit(1)
    with pytest.raises(RuntimeError):
        permit.release()


@pytest.mark.asyncio
async def test_waiters_are_admitted_in_order() -> None:
    permit = BoundedPermit(1)
    order: list[int] = []

    async def worker(n: int) -> None:
        async with permit:
            order.append(n)
            await asyncio.sleep(0)

    await permit.acquire()
    tasks = [asyncio.create_task(worker(n)) for n in range(5)]
    await asyncio.sleep(0)
    assert permit.waiting == 5

    permit.release()
    await asyncio.gather(*tasks)

    assert order == [0, 1, 2, 3, 4]
    assert permit.waiting == 0


@pytest.mark.asyncio
async def test_full_wait_queue_raises_resource_exhausted() -> None:
    permit = BoundedPermit(1, max_waiters=2)
    await permit.acquire()
    waiters = [asyncio.create_task(permit.acquire()) for _ in range(2)]
    await asyncio.sleep(0)

    with pytest.raises(ResourceExhaustedError):
        await permit.acquire()
    assert permit.waiting == 2

    permit.release()
    await waiters[0]
    permit.release()
    await waiters[1]
    permit.release()
    assert permit.held == 0


@pytest.mark.asyncio
async def test_free_permit_ignores_wait_queue_limit() -> None:
    permit = BoundedPermit(1, max_waiters=0)
    async with permit:
        assert permit.held == 1
