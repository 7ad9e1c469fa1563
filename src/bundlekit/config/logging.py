"""structlog configuration for bundlekit.

bundlekit is imported into other programs, so output is routed through one
named handler on the ``bundlekit`` logger instead of the root logger. The
host application's own handlers and levels are left alone.

Two output modes:
- Human (default): console renderer on stderr
- JSON (log_json): one JSON object per line on stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from bundlekit.config.settings import BundleSettings

LOGGER_NAME = "bundlekit"
HANDLER_NAME = "bundlekit-stderr"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _install_handler(logger: logging.Logger, handler: logging.Handler) -> None:
    for existing in list(logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            logger.removeHandler(existing)
            existing.close()
    handler.set_name(HANDLER_NAME)
    logger.addHandler(handler)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog and the ``bundlekit`` handler.

    Calling this again replaces the previous handler.

    Args:
        verbose: DEBUG for ``bundlekit.*`` loggers, WARNING otherwise.
        log_json: Render JSON lines instead of console output.
        stream: Destination, ``sys.stderr`` when omitted.
    """
    stream = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    _install_handler(logger, handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def configure_from_settings(settings: BundleSettings) -> bool:
    """Apply the ``[logging]`` section of *settings*.

    Returns False, without touching logging, when neither ``verbose`` nor
    ``log_json`` is set.
    """
    section = settings.logging
    if not (section.verbose or section.log_json):
        return False
    configure_logging(verbose=section.verbose, log_json=section.log_json)
    return True
