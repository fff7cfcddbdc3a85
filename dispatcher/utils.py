# dispatcher/utils.py
"""Utility functions"""
import datetime
import json
import logging
import sys
from typing import Any, Dict, Optional, TextIO, Union

ROOT_LOGGER = "dispatcher"

# Ids attached to log calls through `extra=`
CONTEXT_FIELDS = ('order_id', 'driver_id')


class JSONFormatter(logging.Formatter):
    """One JSON object per line, carrying order/driver ids when the call supplied them"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'time': datetime.datetime.fromtimestamp(record.created).isoformat(timespec='seconds'),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level: Union[int, str, None] = None, log_format: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single handler to the dispatcher logger.

    Logs go to stderr by default so they stay apart from the menu's output.
    Calling this again replaces the handler instead of stacking another.
    """
    from dispatcher.config import LOG_LEVEL, LOG_FORMAT

    handler = logging.StreamHandler(stream or sys.stderr)
    if (log_format or LOG_FORMAT).lower() == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)-7s %(name)s: %(message)s', datefmt='%H:%M:%S'))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level if level is not None else LOG_LEVEL)
    logger.handlers = [handler]
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one dispatcher component"""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def format_time(dt: Union[datetime.datetime, str, None]) -> str:
    """Format a timestamp (or its ISO string) as HH:MM:SS for display"""
    if dt is None:
        return '-'
    if isinstance(dt, str):
        dt = datetime.datetime.fromisoformat(dt)
    return dt.strftime('%H:%M:%S')


def to_iso(dt: Optional[datetime.datetime]) -> Optional[str]:
    """ISO-8601 string for a timestamp, None passes through"""
    return dt.isoformat() if dt is not None else None
