'''Limited triggered timers: run a callback on an interval a limited number of times.'''

from limited_timers.automatic import AutomaticTrigger, run_limited_triggered_timer
from limited_timers.manual import ManualTrigger, run_limited_triggered_timer_manually
from limited_timers.options import NormalizedOptions, TimerOptions, normalize_options
from limited_timers.session import TriggerState

__all__ = [
    'AutomaticTrigger',
    'ManualTrigger',
    'NormalizedOptions',
    'TimerOptions',
    'TriggerState',
    'normalize_options',
    'run_limited_triggered_timer',
    'run_limited_triggered_timer_manually',
]
