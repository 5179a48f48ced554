'''Shared shape of a trigger session: counter, current timer handle, state.'''

from abc import ABC, abstractmethod
from enum import Enum

import structlog

from limited_timers.options import NormalizedOptions, OptionsLike, normalize_options
from limited_timers.scheduler import AsyncioLoopScheduler, Scheduler, TimerHandle

logger = structlog.get_logger()


class TriggerState(str, Enum):
    '''SCHEDULED -> FIRING -> (SCHEDULED | COMPLETED | CANCELLED)'''

    SCHEDULED = 'scheduled'
    FIRING = 'firing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class TriggerSession(ABC):
    '''
    One run of a trigger. Owns its counter and at most one live host timer.
    Subclasses arm the first timer in start() and advance the counter.
    '''

    kind = 'trigger'

    def __init__(self, options: OptionsLike = None, scheduler: Scheduler | None = None) -> None:
        self.options: NormalizedOptions = normalize_options(options)
        self.counter = 0
        self.state = TriggerState.SCHEDULED
        self._scheduler = scheduler or AsyncioLoopScheduler()
        self._handle: TimerHandle | None = None
        self._log = logger.bind(
            trigger=self.kind,
            total_trigger_count=self.options.total_trigger_count,
            time_interval_ms=self.options.time_interval_ms,
        )

    @abstractmethod
    def start(self) -> 'TriggerSession':
        '''Arm the first host timer and return self.'''

    def _exhausted(self) -> bool:
        return not self.options.unlimited and self.counter >= self.options.total_trigger_count

    def _finish(self) -> None:
        self.state = TriggerState.COMPLETED
        self._log.debug('timer finished', counter=self.counter)
        self.options.on_finished()

    def cancel(self) -> None:
        '''Clear the pending timer. Safe to call any number of times, before or after completion.'''
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self.state is not TriggerState.COMPLETED and self.state is not TriggerState.CANCELLED:
            self.state = TriggerState.CANCELLED
            self._log.debug('timer cancelled', counter=self.counter)

    def __repr__(self) -> str:
        return (
            f'<{type(self).__name__} state={self.state.value} counter={self.counter} '
            f'of {self.options.total_trigger_count}>'
        )
