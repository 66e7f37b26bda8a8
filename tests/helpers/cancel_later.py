import asyncio


def cancel_later(cancel: asyncio.Event, delay_s: float = 0.05) -> asyncio.Task:
    async def _set():
        await asyncio.sleep(delay_s)
        cancel.set()

    return asyncio.create_task(_set())
