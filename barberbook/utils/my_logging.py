# barberbook/utils/my_logging.py
"""Logging configuration"""
import logging
import sys
from contextvars import ContextVar
from typing import Optional

from barberbook.config.settings import get_settings

# Set per request by the correlation id middleware
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="-")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Stamp every record with the current request's correlation id"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = correlation_id_var.get()
        return True


def setup_logging(verbose: bool = True, level: Optional[str] = None):
    """
    Configure application logging.

    Booking, availability and dashboard loggers log at LOG_LEVEL (or
    ``level``); SQL echo is only switched on in DEBUG. With verbose=False
    everything but warnings is dropped and third-party loggers only report
    errors.
    """
    settings = get_settings()

    if verbose:
        level_name = (level or settings.LOG_LEVEL).upper()
        log_level = getattr(logging, level_name, logging.INFO)
    else:
        log_level = logging.WARNING

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True
    )

    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG and verbose else logging.WARNING
    )

    if not verbose:
        for name in ("sqlalchemy", "alembic", "passlib", "uvicorn", "uvicorn.error", "uvicorn.access"):
            third_party = logging.getLogger(name)
            third_party.setLevel(logging.ERROR)
            third_party.propagate = False
