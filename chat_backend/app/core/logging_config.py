import logging
import sys
from contextvars import ContextVar
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import Settings

NO_REQUEST_ID = "-"

# Set per request by the request-id middleware, read by every log record
request_id_var: ContextVar[str] = ContextVar("request_id", default=NO_REQUEST_ID)

_configured = False


class RequestIdFilter(logging.Filter):
    """Attach the current request id to log records."""

    def filter(self, record):
        record.request_id = request_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures request_id always exists."""

    def format(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = NO_REQUEST_ID
        return super().format(record)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    global _configured
    root = logging.getLogger()
    logging.getLogger("chat_backend").setLevel(getattr(logging, level.upper(), logging.INFO))
    if _configured:
        return root
    _configured = True
    root.setLevel(logging.WARNING)

    formatter = SafeFormatter(Settings.LOG_FORMAT)

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    stream_handler.addFilter(RequestIdFilter())
    root.addHandler(stream_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(RequestIdFilter())
        root.addHandler(file_handler)

    logging.getLogger(__name__).info("Logging is set up: level=%s, log_file=%s", level, log_file)
    return root
