"""structlog configuration for builderkit.

builderkit modules log through stdlib ``logging`` so that a host which never
configures logging sees nothing. Calling :func:`configure_logging` routes
those records through structlog's ``ProcessorFormatter``:

- Human (default): console renderer, colored when stderr is a TTY
- JSON (``log_json``): one JSON object per line on stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from builderkit.config.settings import BuilderkitSettings

PACKAGE_LOGGER = "builderkit"
_QUIET_LOGGERS = ("pluggy",)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single structlog-formatted stderr handler.

    Idempotent: repeated calls replace the handler rather than stacking.

    Args:
        verbose: DEBUG for the ``builderkit`` logger; WARNING otherwise.
        log_json: JSON lines instead of console output.
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
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_from_settings(settings: BuilderkitSettings) -> None:
    """Apply the ``[logging]`` section of *settings*."""
    configure_logging(verbose=settings.logging.verbose, log_json=settings.logging.log_json)
