'''asyncio-based host timers, built on loop.call_at / loop.call_later.'''

import asyncio
from collections.abc import Callable

from limited_timers.scheduler.base import Scheduler, TimerHandle


class _OnceHandle(TimerHandle):
    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()


class _RepeatingHandle(TimerHandle):
    '''
    Re-arms itself from the previous deadline so firings don't drift. Deadlines
    missed while the loop was blocked are dropped, not fired back to back.
    The next deadline is armed before the callback runs, so a callback that
    raises (reported by the loop's exception handler) doesn't stop the repeat.
    '''

    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._deadline = loop.time() + interval
        self._handle = loop.call_at(self._deadline, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._deadline += self._interval
        now = self._loop.time()
        if self._deadline <= now:
            # Loop was blocked; skip the missed ticks instead of replaying them
            missed = (now - self._deadline) // self._interval + 1
            self._deadline += missed * self._interval
        self._handle = self._loop.call_at(self._deadline, self._fire)
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class AsyncioLoopScheduler(Scheduler):
    '''Runs timers on an asyncio event loop.'''

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        '''
        loop: event loop to schedule on. If omitted, the running loop is looked
        up each time a timer is armed (so a running loop is required then).
        '''
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return _RepeatingHandle(self._get_loop(), interval_ms / 1000, callback)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return _OnceHandle(self._get_loop().call_later(delay_ms / 1000, callback))
