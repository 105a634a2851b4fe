"""Log filters for PII masking and correlation ID injection."""

import logging
import re


class PIIFilter(logging.Filter):
    """Masks passenger contact details (emails, phone numbers) in log output.

    Dispatch code logs with %-style arguments, so masking runs on the fully
    merged message and the record is rewritten to carry the masked text.
    """

    EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+")
    PHONE_PATTERN = re.compile(r"\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; leave the record for the handler to report
            return True

        masked = message
        if "@" in masked:
            masked = self.EMAIL_PATTERN.sub("[EMAIL]", masked)
        if any(c.isdigit() for c in masked):
            masked = self.PHONE_PATTERN.sub("[PHONE]", masked)

        if masked != message:
            record.msg = masked
            record.args = ()
        return True


class DefaultCorrelationFilter(logging.Filter):
    """Adds default correlation_id if not present."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True
