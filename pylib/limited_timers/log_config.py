'''structlog setup for applications that want the library's timer events on the console.'''

import logging

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer, plain_traceback, set_exc_info
from structlog.processors import StackInfoRenderer, TimeStamper, add_log_level


def configure_logging(level: str | int = 'INFO') -> None:
    '''
    Console logging with standard Python tracebacks instead of Rich's fancy format.
    level: minimum level to emit; use 'DEBUG' to see each timer start/fire/finish.
    '''
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    structlog.configure(
        processors=[
            merge_contextvars,
            add_log_level,
            StackInfoRenderer(),
            set_exc_info,
            TimeStamper(fmt='%Y-%m-%d %H:%M:%S', utc=False),
            ConsoleRenderer(exception_formatter=plain_traceback),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )
