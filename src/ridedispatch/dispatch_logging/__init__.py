from ridedispatch.dispatch_logging.config import build_handler, setup_logging
from ridedispatch.dispatch_logging.context import (
    ContextFilter,
    LogContext,
    log_context,
    log_trip_context,
)
from ridedispatch.dispatch_logging.filters import DefaultCorrelationFilter, PIIFilter
from ridedispatch.dispatch_logging.formatters import DevFormatter, JSONFormatter, dispatch_fields

__all__ = [
    "ContextFilter",
    "DefaultCorrelationFilter",
    "DevFormatter",
    "JSONFormatter",
    "LogContext",
    "PIIFilter",
    "build_handler",
    "dispatch_fields",
    "log_context",
    "log_trip_context",
    "setup_logging",
]
