"""
Logging setup for the climate ranking engine.

Library modules only ever call ``logging.getLogger(__name__)``.  The embedding
application calls ``configure_logging(config.logging)`` once, before ranking.

With ``json_format = true`` in ``[logging]`` each line is one JSON object::

    {"ts": "2026-02-24T15:00:00Z", "level": "WARNING",
     "logger": "climate_ranker.pipeline.rank", "msg": "...", "entity_id": "GridCo"}

Anything passed through ``extra=`` (for example ``entity_id`` or ``profile``)
is copied to the top level of the object.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from climate_ranker.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else arrived via ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts":     self.formatTime(record, TIMESTAMP_FORMAT),
            "level":  record.levelname,
            "logger": record.name,
            "msg":    record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def _build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return _JsonFormatter()
    formatter = logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    formatter.converter = time.gmtime
    return formatter


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``.

    Always logs to stdout; also appends to ``config.log_file`` when set,
    creating its parent directory.
    """
    level = logging.getLevelNamesMapping()[config.level]

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = _build_formatter(config.json_format)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
