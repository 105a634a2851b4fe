"""Log formatters that surface dispatch context fields."""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from ridedispatch.core.exceptions import RegistryError

# Set on records by log_trip_context / log_context in the dispatch engine
DISPATCH_FIELDS = ("trip_id", "passenger_id", "driver_id", "eligible_drivers", "rating")


def dispatch_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {name: getattr(record, name) for name in DISPATCH_FIELDS if hasattr(record, name)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line.

    Dispatch context is grouped under ``dispatch`` so trip, passenger and
    driver ids can be indexed without parsing the message. A RegistryError
    attached to the record contributes its type and ``details``.
    """

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": self.environment,
            "correlation_id": getattr(record, "correlation_id", "-"),
        }

        fields = dispatch_fields(record)
        if fields:
            log_data["dispatch"] = fields

        if record.exc_info:
            error = record.exc_info[1]
            if isinstance(error, RegistryError):
                log_data["error"] = {"type": type(error).__name__, "details": error.details}
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class DevFormatter(logging.Formatter):
    """Human-readable lines; dispatch context trails the message as key=value."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = dispatch_fields(record)
        if not fields:
            return line

        context = " ".join(f"{name}={value}" for name, value in fields.items())
        # Tracebacks follow the first line
        first, newline, rest = line.partition("\n")
        return f"{first} [{context}]{newline}{rest}"
