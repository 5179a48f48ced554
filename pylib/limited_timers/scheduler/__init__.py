'''Host timer implementations. Swap via scheduler= param or env.'''

import os

from limited_timers.scheduler.asyncio_loop import AsyncioLoopScheduler
from limited_timers.scheduler.base import Scheduler, TimerHandle

__all__ = ['AsyncioLoopScheduler', 'Scheduler', 'TimerHandle', 'get_scheduler']

SCHEDULER_ENV = 'LIMITED_TIMERS_SCHEDULER'


def get_scheduler(kind: str | None = None) -> Scheduler:
    '''
    Factory for host timers. kind: asyncio (default), apscheduler (if installed).
    Falls back to the LIMITED_TIMERS_SCHEDULER env var when kind is not given.
    '''
    kind = (kind or os.environ.get(SCHEDULER_ENV) or 'asyncio').lower()
    if kind == 'asyncio':
        return AsyncioLoopScheduler()
    if kind == 'apscheduler':
        from limited_timers.scheduler.apscheduler_impl import APSchedulerImpl
        return APSchedulerImpl()
    raise ValueError(f'unknown scheduler: {kind}')
