"""
Log handler setup for the ``cryptoconf`` logger hierarchy.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the CLI.  ``json`` emits one object per line
for log shippers (Loki and friends), ``text`` is for terminals.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_ROOT_LOGGER = "cryptoconf"
_HANDLER_NAME = "cryptoconf-default"


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: str = "warning", fmt: str = "text") -> logging.Logger:
    """Install (or replace) the cryptoconf stderr handler.

    Args:
        level: ``debug`` | ``info`` | ``warning`` | ``error``.
        fmt: ``json`` or ``text``.

    Returns:
        The ``cryptoconf`` package logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
