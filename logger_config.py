"""
Logging configuration for the AWS service helpers.

Modules get a plain stdlib logger through ``get_logger``. The process
entrypoint calls ``setup_log`` once to route every record to stdout as a
single flattened JSON line (CloudWatch friendly).
"""
import logging
import os
import sys
from typing import Optional, Union

import structlog

_CONFIGURED = False

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def get_log_level(default: str = "INFO") -> str:
    """
    Read the log level filter from the LOG_LEVEL environment variable.

    Unknown values fall back to ``default``.
    """
    log_level = os.environ.get("LOG_LEVEL", default).upper()
    if log_level not in VALID_LOG_LEVELS:
        return default
    return log_level


def resolve_log_level(level: Optional[Union[str, int]] = None) -> Union[str, int]:
    """
    Turn an explicit level into one the root logger accepts.

    Numeric levels are used as is; unknown names fall back to LOG_LEVEL.
    """
    if isinstance(level, int):
        return level
    if level and level.upper() in VALID_LOG_LEVELS:
        return level.upper()
    return get_log_level()


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (defaults to this module if not provided)

    Returns:
        Logger that propagates to the root handler installed by setup_log
    """
    return logging.getLogger(name or __name__)


def setup_log(level: Optional[Union[str, int]] = None) -> None:
    """
    Configure JSON structured logging on the root logger.

    Only the first call has an effect; later calls are no-ops.

    Args:
        level: Log level override (defaults to LOG_LEVEL, then INFO)
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved_level = resolve_log_level(level)

    pre_chain = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        foreign_pre_chain=pre_chain,
    )

    # Lambda and ECS both forward stdout to CloudWatch
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(resolved_level)

    _CONFIGURED = True
