"""Logging setup: readable console output plus JSON log files.

Extraction code tags its records with ``retailer`` and ``url`` through
``get_logger``; the JSON files carry those as top-level keys.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from pythonjsonlogger import jsonlogger

from wishlist.config import settings

# Context keys promoted to top-level JSON fields (always present, possibly null)
CONTEXT_FIELDS = ("retailer", "url")

# Third-party loggers that are too chatty at DEBUG
QUIET_LOGGERS = ("asyncio", "httpx", "httpcore", "urllib3")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter adding UTC timestamp, level, source and extraction context."""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['source'] = f"{record.filename}:{record.lineno}"

        for field in CONTEXT_FIELDS:
            log_record.setdefault(field, getattr(record, field, None))


def setup_logging(base_dir: str | Path | None = None) -> logging.Logger:
    """Configure root logging for the service.

    Args:
        base_dir: Directory that gets the logs/ folder (default: cwd)

    Returns:
        The configured root logger
    """
    logs_dir = (Path(base_dir) if base_dir else Path.cwd()) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root_logger.addHandler(console_handler)

    json_formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")

    app_handler = logging.FileHandler(logs_dir / "app.log", encoding="utf-8")
    app_handler.setFormatter(json_formatter)
    root_logger.addHandler(app_handler)

    error_handler = logging.FileHandler(logs_dir / "error.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(json_formatter)
    root_logger.addHandler(error_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


class LoggerAdapter(logging.LoggerAdapter):
    """Adapter attaching fixed extraction context (retailer, url) to every record."""

    def process(self, msg, kwargs):
        kwargs['extra'] = {**self.extra, **kwargs.get('extra', {})}
        return msg, kwargs


def get_logger(name: str, **context) -> LoggerAdapter:
    """
    Get a logger that tags records with extraction context.

    Args:
        name: Logger name (usually __name__)
        **context: Context fields (e.g., retailer='rozetka', url='https://...')

    Returns:
        LoggerAdapter with context
    """
    return LoggerAdapter(logging.getLogger(name), context)
