"""Application-wide logging initialization

Call `initialize_logging()` once in the process entrypoint (see `shorturl.__main__`)
before the application starts serving.

Every record is written to stdout as a single JSON line:
{
    "timestamp": "2026-10-18T12:00:00.000Z",
    "level": "INFO",
    "logger": "shorturl.services.short_url_service",
    "message": "Shortened long URL.",
    "shortcode": "K9xT2q"
}

Anything passed via `extra={...}` is attached as top-level fields. Tracebacks
(logger.exception) land in an "exception" field.
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from shorturl.utils.constants import LOG_LEVEL_ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(
        {
            'args',
            'asctime',
            'created',
            'exc_info',
            'exc_text',
            'filename',
            'funcName',
            'levelname',
            'levelno',
            'lineno',
            'module',
            'msecs',
            'message',
            'msg',
            'name',
            'pathname',
            'process',
            'processName',
            'relativeCreated',
            'stack_info',
            'thread',
            'threadName',
            'taskName',
            'color_message',  # injected by uvicorn
        }
    )

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec='milliseconds') \
                            .replace('+00:00', 'Z')
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all logging (including uvicorn's) through the JSON formatter.

    Args:
        level (str | None):
            Root log level. Defaults to the LOG_LEVEL environment variable, then INFO.
    """
    log_level = (level or os.getenv(LOG_LEVEL_ENV, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'loggers': {
                # Requests are logged by shorturl.web.middleware instead
                'uvicorn.access': {'level': 'WARNING', 'handlers': [], 'propagate': True},
                'uvicorn.error': {'handlers': [], 'propagate': True},
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
