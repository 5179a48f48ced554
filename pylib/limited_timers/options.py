'''
Timer options and their normalization.

Invalid values are never rejected; they are clamped to the defaults:
- total_trigger_count: -1 means forever; anything non-numeric, non-finite, or
  <= 0 (other than -1) becomes 1.
- time_interval_ms: anything non-numeric, non-finite, or negative becomes 1000.
  0 becomes 1000 as well (it is treated as unset).
- on_finished: defaults to a no-op.
'''

from __future__ import annotations

import math
import numbers
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

UNLIMITED = -1
DEFAULT_TRIGGER_COUNT = 1
DEFAULT_INTERVAL_MS = 1000

ENV_PREFIX = 'LIMITED_TIMERS_'


def _noop() -> None:
    pass


def _is_not_a_number(val: Any) -> bool:
    '''True for anything other than a finite real number. bool doesn't count as a number.'''
    if isinstance(val, bool) or not isinstance(val, numbers.Real):
        return True
    return not math.isfinite(val)


def _parse_number(raw: str | None) -> Any:
    '''Env values are strings; keep unparsable ones as-is so normalization clamps them.'''
    if raw is None:
        return None
    raw = raw.strip()
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        return raw


@dataclass
class TimerOptions:
    '''Raw timer options, as given by the caller. Any field may be missing or invalid.'''

    total_trigger_count: Any = None
    time_interval_ms: Any = None
    on_finished: Callable[[], None] | None = None

    @classmethod
    def from_env(cls, env_file: Path | str | None = None, prefix: str = ENV_PREFIX) -> TimerOptions:
        '''
        Build options from env vars, e.g. LIMITED_TIMERS_TIME_INTERVAL_MS.
        Values in env_file (dotenv format), if it exists, override the process env.
        '''
        env: dict[str, str | None] = dict(os.environ)
        if env_file is not None and Path(env_file).exists():
            env.update(dotenv_values(env_file))
        return cls(
            total_trigger_count=_parse_number(env.get(f'{prefix}TOTAL_TRIGGER_COUNT')),
            time_interval_ms=_parse_number(env.get(f'{prefix}TIME_INTERVAL_MS')),
        )


@dataclass(frozen=True)
class NormalizedOptions:
    '''Fully populated options. total_trigger_count is -1 or >= 1; time_interval_ms > 0.'''

    total_trigger_count: numbers.Real
    time_interval_ms: numbers.Real
    on_finished: Callable[[], None]

    @property
    def unlimited(self) -> bool:
        return self.total_trigger_count == UNLIMITED


OptionsLike = TimerOptions | NormalizedOptions | Mapping[str, Any] | None


def _field(options: OptionsLike, name: str) -> Any:
    if options is None:
        return None
    if isinstance(options, Mapping):
        return options.get(name)
    return getattr(options, name, None)


def normalize_options(options: OptionsLike = None) -> NormalizedOptions:
    '''
    Fill defaults and clamp invalid values. Pure; never raises.
    Accepts TimerOptions, an already normalized NormalizedOptions, a mapping with
    the same keys, or None.
    '''
    count = _field(options, 'total_trigger_count')
    interval = _field(options, 'time_interval_ms')
    on_finished = _field(options, 'on_finished')

    if _is_not_a_number(count) or (count <= 0 and count != UNLIMITED):
        count = DEFAULT_TRIGGER_COUNT
    else:
        count = count or DEFAULT_TRIGGER_COUNT

    if _is_not_a_number(interval) or interval < 0:
        interval = DEFAULT_INTERVAL_MS
    else:
        interval = interval or DEFAULT_INTERVAL_MS

    return NormalizedOptions(
        total_trigger_count=count,
        time_interval_ms=interval,
        on_finished=on_finished or _noop,
    )
