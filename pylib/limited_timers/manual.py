'''
Manual trigger: the callback gets a `next` continuation and must call it to
request the next firing, which then happens time_interval_ms later.

The trigger never calls `next` itself. A callback that raises before calling
`next` stalls its session for good; callbacks should call `next` on failure
paths too. Calling `next` twice in one firing advances the counter twice.
'''

import functools
from collections.abc import Callable

from limited_timers.options import OptionsLike
from limited_timers.scheduler import Scheduler
from limited_timers.session import TriggerSession, TriggerState

Continuation = Callable[[], None]


def _noop(next: Continuation) -> None:
    pass


class ManualTrigger(TriggerSession):
    '''Schedules each firing one interval after the previous call to next().'''

    kind = 'manual'

    def __init__(
        self,
        callback: Callable[[Continuation], None] | None = None,
        options: OptionsLike = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(options, scheduler)
        self._callback = callback or _noop
        self.fired = 0
        self._generation = 0

    def start(self) -> 'ManualTrigger':
        self._schedule()
        self._log.debug('timer started')
        return self

    def _schedule(self) -> None:
        self._generation += 1
        fire = functools.partial(self._fire, self._generation)
        self._handle = self._scheduler.call_later(self.options.time_interval_ms, fire)
        self.state = TriggerState.SCHEDULED

    def _fire(self, generation: int) -> None:
        if self._handle is None or generation != self._generation:
            # Cancelled or replaced, but the host delivered it anyway
            return
        self._handle = None
        self.state = TriggerState.FIRING
        self.fired += 1
        self._log.debug('timer fired', firing=self.fired)
        self._callback(self.advance)

    def advance(self) -> None:
        '''The `next` continuation handed to the callback.'''
        if self.counter >= self.fired:
            self._log.warning('continuation called more than once', counter=self.counter, firing=self.fired)
        self.counter += 1
        if self._exhausted():
            if self.state is TriggerState.CANCELLED:
                return
            self._finish()
        else:
            # Also reached after cancel() if the in-flight callback calls next
            self._schedule()


def run_limited_triggered_timer_manually(
    callback: Callable[[Continuation], None] | None = None,
    options: OptionsLike = None,
    *,
    scheduler: Scheduler | None = None,
) -> Callable[[], None]:
    '''
    Call callback(next) after options.time_interval_ms. Each call to next()
    schedules the following firing time_interval_ms later, up to
    options.total_trigger_count firings (-1 for forever); after the last next()
    options.on_finished is called.
    Returns a function that clears the pending timer.

    Example: read one line of a file every 0.5 seconds, at most 7 times

        def read_line(next):
            print(fp.readline(), end='')
            next()

        stop = run_limited_triggered_timer_manually(
            read_line,
            TimerOptions(time_interval_ms=500, total_trigger_count=7, on_finished=fp.close),
        )
    '''
    return ManualTrigger(callback, options, scheduler).start().cancel
