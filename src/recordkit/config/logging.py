"""structlog configuration for recordkit.

recordkit emits two kinds of log records, both rendered by one processor
chain on a single stderr handler:

- stdlib records from ``logging.getLogger(__name__)`` in the service layer.
  RecordService logs rejected input at DEBUG, writes that changed nothing
  at WARNING, and storage faults through ``logger.exception`` (ERROR with
  traceback) just before re-raising them. ``extra={...}`` fields such as
  ``operation`` become structured keys.
- structlog events from ``recordkit.telemetry`` (``span.complete`` at
  DEBUG) when telemetry is enabled.

Output is console-rendered by default, or one JSON object per line with
``log_json``. Tracebacks are rendered by the console renderer itself and
flattened into an ``exception`` key in JSON mode.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that stay at WARNING even in verbose mode.
_QUIET_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.pool")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderers(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route recordkit and structlog output to one stderr handler.

    Safe to call repeatedly (ServiceContext calls it on construction): the
    root logger is left with exactly one handler.

    Args:
        verbose: Enable DEBUG for the ``recordkit`` logger tree, which
            includes validation rejections and telemetry spans.
        log_json: Use JSON renderer instead of console renderer.
    """
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("recordkit").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
