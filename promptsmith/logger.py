"""
Project logging facility.

Other modules obtain loggers via ``get_logger(__name__)``. Handlers live only on
the root ``promptsmith`` logger and are attached once; children propagate.

Environment overrides:
    PROMPTSMITH_LOG_LVL   console level (DEBUG / INFO / WARNING / ... or numeric)
    PROMPTSMITH_LOG_JSON  truthy -> emit JSON lines
"""
from __future__ import annotations

import json
import logging
import os
import time

_ROOT_LOGGER_NAME = "promptsmith"

FORMAT = "%(asctime)s | %(name)s | %(levelname)-8s | %(message)s"
DTFMT = "%Y-%m-%d %H:%M:%S"


def _is_truthy(val: str | None) -> bool:
    if val is None:
        return False
    return val.strip().lower() in {"1", "true", "yes", "on", "y", "t"}


def _parse_level(val: str | None, default: int = logging.WARNING) -> int:
    """Parse a level given by name ("INFO") or number ("20"); *default* on anything else."""
    if val is None or not val.strip():
        return default
    s = val.strip()
    if s.isdigit():
        return int(s)
    level = logging.getLevelName(s.upper())
    return level if isinstance(level, int) else default


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S%z", time.localtime(record.created)),
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def _make_console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(_parse_level(os.getenv("PROMPTSMITH_LOG_LVL")))
    if _is_truthy(os.getenv("PROMPTSMITH_LOG_JSON")):
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=FORMAT, datefmt=DTFMT))
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``promptsmith`` root, configuring the root once."""
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        root.setLevel(logging.DEBUG)
        root.addHandler(_make_console_handler())
        root.propagate = False

    if name is None or name == _ROOT_LOGGER_NAME:
        return root

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
