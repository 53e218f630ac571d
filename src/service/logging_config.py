from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

SERVICE_NAME = "car-rarity"

# Passed through ``extra=`` and lifted to top-level keys so logs can be
# filtered by vehicle or tier without digging into "data".
CLASSIFICATION_FIELDS: tuple[str, ...] = ("car_slug", "rarity_tier", "rarity_score", "oracle_source", "received_kb")

# httpx logs every oracle request at INFO
_CHATTY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore")


def new_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


def classification_extra(car: Any = None, **fields: Any) -> dict[str, Any]:
    """Build the ``extra=`` mapping for a classification log line."""
    extra = dict(fields)
    if car is not None:
        extra.update(
            car_slug=car.car_slug,
            rarity_tier=car.rarity_tier,
            rarity_score=car.rarity_score,
        )
    return extra


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": correlation_id.get(""),
        }
        for name in CLASSIFICATION_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            entry["data"] = extra_data
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(asctime)s %(levelname)-8s [%(name)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        tags = [f"{name}={getattr(record, name)}" for name in CLASSIFICATION_FIELDS if getattr(record, name, None) is not None]
        return f"{line} {' '.join(tags)}" if tags else line


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for h in root.handlers[:]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())
    root.addHandler(handler)

    if root.level < logging.WARNING:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
