import itertools
from collections.abc import Callable

import pytest
import structlog

from limited_timers.scheduler import Scheduler, TimerHandle


class FakeTimer(TimerHandle):
    '''A timer on the fake clock. interval is None for one-shots.'''

    _seq = itertools.count()

    def __init__(self, due: float, interval: float | None, callback: Callable[[], None]):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.done = False
        self.seq = next(self._seq)

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler(Scheduler):
    '''Deterministic host timers driven by advance(ms).'''

    def __init__(self):
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_every(self, interval_ms, callback):
        timer = FakeTimer(self.now + interval_ms, interval_ms, callback)
        self.timers.append(timer)
        return timer

    def call_later(self, delay_ms, callback):
        timer = FakeTimer(self.now + delay_ms, None, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.done]

    def advance(self, ms: float) -> None:
        '''Run every timer due within the next ms, in deadline order.'''
        end = self.now + ms
        while True:
            due = [t for t in self.pending if t.due <= end]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = timer.due
            # Repeating timers re-arm before the callback, like the asyncio scheduler
            if timer.interval is None:
                timer.done = True
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = end


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
