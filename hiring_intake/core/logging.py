"""Structured logging configuration.

Modules log a snake_case event name as the message and pass their fields
through ``extra={...}``.  The formatter below renders those fields after the
message as ``key=value`` pairs so they survive into plain-text logs.
"""

import logging
import sys

from hiring_intake.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord carries; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "uvicorn.access")


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields to the formatted message."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not fields:
            return base
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        return f"{base} | {rendered}"


def setup_logging() -> None:
    """Install one stdout handler on the root logger at ``settings.LOG_LEVEL``.

    Safe to call more than once; earlier handlers (uvicorn's included) are
    replaced.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(ExtraFieldsFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
