'''Automatic trigger: fire a callback on a fixed interval, a limited number of times.'''

from collections.abc import Callable

from limited_timers.options import OptionsLike, _noop
from limited_timers.scheduler import Scheduler
from limited_timers.session import TriggerSession, TriggerState


class AutomaticTrigger(TriggerSession):
    '''
    Repeats callback every time_interval_ms. Each tick calls the callback, then
    increments the counter, then checks for completion. When the count is reached
    the repeating timer is cleared and on_finished runs once.
    '''

    kind = 'automatic'

    def __init__(
        self,
        callback: Callable[[], None] | None = None,
        options: OptionsLike = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(options, scheduler)
        self._callback = callback or _noop

    def start(self) -> 'AutomaticTrigger':
        self._handle = self._scheduler.call_every(self.options.time_interval_ms, self._tick)
        self._log.debug('timer started')
        return self

    def _tick(self) -> None:
        if self._handle is None:
            # Stale tick from a host that fires a batch after the timer was cleared
            return
        self.state = TriggerState.FIRING
        self._callback()
        self.counter += 1
        self._log.debug('timer fired', counter=self.counter)
        if self.state is TriggerState.CANCELLED:
            # Cancelled from inside the callback
            return
        if self._exhausted():
            self._handle.cancel()
            self._handle = None
            self._finish()
        else:
            self.state = TriggerState.SCHEDULED


def run_limited_triggered_timer(
    callback: Callable[[], None] | None = None,
    options: OptionsLike = None,
    *,
    scheduler: Scheduler | None = None,
) -> Callable[[], None]:
    '''
    Run callback every options.time_interval_ms, at most options.total_trigger_count
    times (-1 for forever), then call options.on_finished.
    Returns a function that clears the timer; calling it after completion is harmless.

    Example: increase a counter every 2 seconds, 3 times

        counter = 0

        def bump():
            nonlocal counter
            counter += 1

        stop = run_limited_triggered_timer(
            bump,
            TimerOptions(time_interval_ms=2000, total_trigger_count=3, on_finished=lambda: print('done')),
        )
        # stop() clears it early
    '''
    return AutomaticTrigger(callback, options, scheduler).start().cancel
