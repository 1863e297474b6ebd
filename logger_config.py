"""
Logging configuration for the faucet Lambda.

Lambda forwards stdout to CloudWatch Logs. Each record carries the
correlation id of the invocation that produced it, so a whole batch can be
followed with a single CloudWatch filter.
"""
import logging
import os
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s'

_correlation_id: Optional[str] = None


def set_correlation_id(correlation_id: Optional[str]) -> None:
    """Install the correlation id stamped on records that don't carry one."""
    global _correlation_id
    _correlation_id = correlation_id


class CorrelationIdFilter(logging.Filter):
    """Fill in ``record.correlation_id`` unless the caller passed it in ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'correlation_id', None):
            record.correlation_id = _correlation_id or '-'
        return True


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a configured logger instance for AWS Lambda.

    Args:
        name: Logger name (defaults to this module's name if not provided)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name or __name__)

    # Lambda reuses the process across warm invocations
    if logger.handlers:
        return logger

    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logger.level)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

    logger.addHandler(handler)
    logger.propagate = False

    return logger
