'''APScheduler-based host timers. Install with: uv pip install limited-timers[scheduler-apscheduler]'''

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger

from limited_timers.scheduler.base import Scheduler, TimerHandle


class _JobHandle(TimerHandle):
    def __init__(self, job: Job) -> None:
        self._job = job

    def cancel(self) -> None:
        try:
            self._job.remove()
        except JobLookupError:
            # Already fired (date trigger) or already removed
            pass


class APSchedulerImpl(Scheduler):
    '''Uses an APScheduler AsyncIOScheduler for the host timers.'''

    def __init__(self, scheduler: AsyncIOScheduler | None = None) -> None:
        '''
        scheduler: an existing AsyncIOScheduler to add jobs to. If omitted, one is
        created on the running loop the first time a timer is armed.
        '''
        self._scheduler = scheduler

    def _ensure_started(self) -> AsyncIOScheduler:
        if self._scheduler is None:
            self._scheduler = AsyncIOScheduler(event_loop=asyncio.get_running_loop())
        if not self._scheduler.running:
            self._scheduler.start()
        return self._scheduler

    def _add(self, trigger, callback: Callable[[], None]) -> TimerHandle:
        # Coroutine jobs run on the loop itself; plain functions would go to a thread pool
        async def _job_wrapper() -> None:
            callback()

        job = self._ensure_started().add_job(_job_wrapper, trigger, coalesce=True, misfire_grace_time=None)
        return _JobHandle(job)

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self._add(IntervalTrigger(seconds=interval_ms / 1000), callback)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        run_date = datetime.now(timezone.utc) + timedelta(milliseconds=delay_ms)
        return self._add(DateTrigger(run_date=run_date), callback)

    def shutdown(self) -> None:
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
