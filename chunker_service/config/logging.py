"""Logging setup for the chunker. Fields passed via extra= are appended as key=value pairs."""

import logging
import sys

from chunker_service.config.settings import get_settings

# Attributes every LogRecord carries; anything else came from extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that renders structured extra fields after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if not fields:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in sorted(fields.items()))


def configure_logging() -> None:
    """Install a single stdout handler on the root logger. DEBUG wins over log_level."""
    settings = get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        ExtraFieldsFormatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Per-request access lines are noise next to the processor logs
    for name in ("uvicorn.access", "httpx"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
