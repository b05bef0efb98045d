import json
import logging

from brandkeeper.logging_config import LOG_FORMAT, BrandKeeperJsonFormatter, setup_logging
from brandkeeper.settings import Settings


def record(message="Brand settings updated", level=logging.INFO):
    return logging.LogRecord("brandkeeper.core.brand", level, __file__, 1, message, None, None)


def test_records_are_json():
    line = json.loads(BrandKeeperJsonFormatter(LOG_FORMAT).format(record(level=logging.WARNING)))
    assert line["message"] == "Brand settings updated"
    assert line["level"] == "WARNING"
    assert line["name"] == "brandkeeper.core.brand"
    assert line["timestamp"]
    assert "client_ip" not in line


def test_setup_is_idempotent():
    settings = Settings(_env_file=None, LOG_LEVEL="info")
    setup_logging(settings)
    setup_logging(settings)
    root = logging.getLogger()
    ours = [h for h in root.handlers if isinstance(h.formatter, BrandKeeperJsonFormatter)]
    assert len(ours) == 1
    assert root.level == logging.INFO
