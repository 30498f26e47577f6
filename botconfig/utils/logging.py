"""
Structured logging configuration using structlog.

structlog events are handed to the standard library logging tree and
rendered by its handlers, so the console and the optional log file receive
the same records. JSON output for deployed bots, colored console output when
run by hand.
"""

import logging
import sys
from typing import List, Optional, TextIO

import structlog
from structlog.types import Processor


def _formatter(
    json_output: bool,
    colors: bool,
    foreign_pre_chain: List[Processor],
) -> structlog.stdlib.ProcessorFormatter:
    if json_output:
        renderers: List[Processor] = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=colors)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=foreign_pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure structured logging for the configuration store.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON logs
        log_file: Optional file path to also write logs to (never colored)
        stream: Console stream (defaults to stdout)
    """
    log_level = getattr(logging, level.upper())

    shared_processors: List[Processor] = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(_formatter(json_output, True, shared_processors))
    handlers: List[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(_formatter(json_output, False, shared_processors))
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
