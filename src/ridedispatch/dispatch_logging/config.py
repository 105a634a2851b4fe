"""Logging setup for the registry and its command-line entry point."""

import logging
import sys
from typing import TextIO

from ridedispatch.dispatch_logging.context import ContextFilter
from ridedispatch.dispatch_logging.filters import DefaultCorrelationFilter, PIIFilter
from ridedispatch.dispatch_logging.formatters import DevFormatter, JSONFormatter

HANDLER_NAME = "ridedispatch"


def build_handler(
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Stream handler carrying dispatch context, correlation ids and PII masking."""
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())
    handler.addFilter(ContextFilter())
    handler.addFilter(DefaultCorrelationFilter())
    handler.addFilter(PIIFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install the registry handler on the root logger.

    Logs go to stderr by default; stdout is reserved for command output such
    as the JSON summary. Calling again replaces the handler installed by the
    previous call and leaves any other root handlers alone.
    """
    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)

    handler = build_handler(json_output, environment, stream)
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())
    return handler
