import asyncio
from typing import Awaitable
from typing import TypeVar

from insta.errors import CancelledError

T = TypeVar('T')


async def wait_cancellable(awaitable: Awaitable[T], cancel: asyncio.Event | None, operation: str,
                           services: list[str] | None = None) -> T:
    """
    Awaits `awaitable` until it finishes or `cancel` is set.

    On cancellation the pending work is cancelled and awaited, so its cleanup
    (process termination, exec release) is done before CancelledError is raised.
    Backend side effects already issued are left as they are.
    """
    task = asyncio.ensure_future(awaitable)
    if cancel is None:
        try:
            return await task
        except asyncio.CancelledError:
            raise CancelledError(operation, services) from None

    cancel_waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({task, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        done = set()

    if task in done:
        cancel_waiter.cancel()
        return task.result()

    cancel_waiter.cancel()
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    raise CancelledError(operation, services)
