"""
Log setup for the orc shell.

The core has nothing to configure here: guards, transitions and planners
never log. Services in ``orc.app`` emit one event per decision (a denial, a
plan, a batch of executed effects) and carry the unit id as bound context::

    log = structlog.get_logger().bind(mission_id="MISSION-001")
    log.info("mission_launch_planned", effects=7, dry_run=True)

``configure_from_config`` reads the ``[logging]`` table of ``config.toml``;
``format = "json"`` switches from the console renderer to JSON lines.
Records from stdlib loggers go through the same processor chain, so
third-party output lands in the same format.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from orc.core.config import LoggingConfig


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _install_formatter(formatter: logging.Formatter) -> None:
    root = logging.getLogger()
    ours = [
        h
        for h in root.handlers
        if isinstance(h, logging.StreamHandler)
        and isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
    ]
    if ours:
        for h in ours:
            h.setFormatter(formatter)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Route structlog and stdlib records to stderr.

    ``level`` is a stdlib level name; unknown names fall back to INFO.
    Repeat calls replace the renderer on orc's handler rather than adding a
    second one.
    """
    processors = _shared_processors()

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    _install_formatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            foreign_pre_chain=processors,
        )
    )
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


def configure_from_config(logging_config: LoggingConfig) -> None:
    configure_logging(level=logging_config.level, json_output=logging_config.format == "json")
