from __future__ import annotations

import logging
import sys
import time
from typing import Dict, Any

import structlog

LogEvent = Dict[str, Any]


def exc_info(logger, level: str, event: LogEvent,) -> LogEvent:
    if level == "exception" and "exc_info" not in event:
        event["exc_info"] = True
    return event


_renderer = structlog.processors.JSONRenderer(ensure_ascii=False)


def json_renderer(logger, level: str, event: LogEvent) -> str:
    event["level"] = level
    return _renderer(logger, level, event)


def add_timestamp(logger, level: str, event: LogEvent,) -> LogEvent:
    event["ts"] = time.time()
    return event


def setup_logging(level: int = logging.INFO, json: bool = False) -> None:
    shared = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        exc_info,
    ]
    if json:
        shared.append(add_timestamp)
        render = [structlog.processors.format_exc_info, json_renderer]
    else:
        shared.append(structlog.processors.TimeStamper(fmt='iso'))
        render = [structlog.dev.ConsoleRenderer()]

    # one renderer for structlog events and plain logging records alike
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render,
        ],
    ))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
