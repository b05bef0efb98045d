import logging
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from brandkeeper.core.audit.service import current_client_ip
from brandkeeper.settings import Settings

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


class BrandKeeperJsonFormatter(JsonFormatter):
    def add_fields(self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname

        client_ip = current_client_ip()
        if client_ip:
            log_record["client_ip"] = client_ip


def setup_logging(settings: Settings) -> None:
    root = logging.getLogger()
    # create_app may run more than once per process
    if not any(isinstance(handler.formatter, BrandKeeperJsonFormatter) for handler in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(BrandKeeperJsonFormatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
