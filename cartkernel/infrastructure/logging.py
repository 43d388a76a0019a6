"""Logging setup.

The library only calls ``structlog.get_logger()``; applications decide how
log lines are rendered by calling :func:`configure_logging` once at startup.
"""

import logging
import sys

import structlog

from cartkernel.infrastructure.config import Settings, settings as default_settings


def configure_logging(config: Settings | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        config: Settings to read the level and renderer from. Defaults to
            the module-level settings.
    """
    config = config or default_settings
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if config.log_json:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
