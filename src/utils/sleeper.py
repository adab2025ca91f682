import asyncio


class CancellableSleeper:
    """
    Sleep primitive bound to a shutdown event.

    Every deliberate delay of the bot goes through one instance, so a signal
    handler can wake all of them at once and tests can swap in an instant one.
    """

    __slots__ = ('_stop_event',)

    def __init__(self) -> None:
        self._stop_event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    def cancel(self) -> None:
        self._stop_event.set()

    async def sleep(self, seconds: float) -> bool:
        """Returns False when the sleep was interrupted by a shutdown request."""
        if self.cancelled:
            return False
        if seconds <= 0:
            await asyncio.sleep(0)
            return True
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return True
        return False

    async def wait(self) -> None:
        await self._stop_event.wait()
