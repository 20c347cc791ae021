"""Structured logging configuration.

Uses structlog processors on top of stdlib logging so modules keep using
``logging.getLogger(__name__)``. Console, JSON and file output are
supported. When a simulation clock is supplied every record is stamped
with ``sim_t`` so log lines from a stepped engagement line up with
simulation time rather than wall time.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

from activedecoy.core.clock import Clock

ROOT_LOGGER = "activedecoy"


class SimTimeStamper:
    """structlog processor adding the simulation elapsed time."""

    def __init__(self, clock: Clock, key: str = "sim_t"):
        self._clock = clock
        self._key = key

    def __call__(self, logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict[self._key] = round(self._clock.elapsed(), 3)
        return event_dict


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_json: bool = False,
    clock: Clock | None = None,
) -> None:
    """Configure structured logging for the ``activedecoy`` logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to a log file. Parent dirs are created.
        log_json: Render lines as JSON instead of human-readable text.
        clock: Optional simulation clock; adds ``sim_t`` to each record.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
    ]
    if clock is not None:
        shared_processors.append(SimTimeStamper(clock))
    shared_processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(file_path), encoding="utf-8"))

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    # Records from plain stdlib loggers go through foreign_pre_chain.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    root = logging.getLogger(ROOT_LOGGER)
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(numeric_level)
    for h in handlers:
        h.setLevel(numeric_level)
        h.setFormatter(formatter)
        root.addHandler(h)
    root.propagate = False
