'''Host timer primitives. Implementations can use the asyncio loop, APScheduler, etc.'''

from abc import ABC, abstractmethod
from collections.abc import Callable


class TimerHandle(ABC):
    '''A pending host timer. Cancelling it twice is harmless.'''

    @abstractmethod
    def cancel(self) -> None:
        '''Stop the timer. No-op if it already fired (one-shot) or was cancelled.'''


class Scheduler(ABC):
    '''Abstract host scheduler: repeating and one-shot timers in milliseconds.'''

    @abstractmethod
    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        '''Call callback every interval_ms, first call one interval from now.'''

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        '''Call callback once, delay_ms from now.'''
