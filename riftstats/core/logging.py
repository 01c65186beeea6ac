"""Structured logging for riftstats.

Library modules only call ``structlog.get_logger(__name__)``; the embedding
application calls ``setup_logging`` once at startup.
"""

import logging
from typing import Any, List, Optional

import structlog

from .config import Settings, get_global_settings


def _processors(json_output: bool) -> List[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None,
) -> int:
    """
    Configure structlog on top of the standard logging module.

    :param settings: Source of defaults (global settings when None)
    :param log_level: Overrides ``settings.log_level``
    :param json_output: Overrides the default, which is JSON lines unless
        ``settings.debug`` is set
    :returns: The numeric level that was applied
    """
    settings = settings or get_global_settings()
    level_name = (log_level or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)
    if json_output is None:
        json_output = not settings.debug

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=_processors(json_output),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return level
