"""
Structured logging for the Medical Dashboard client.

Each AnalysisSession logs through its own bound StructuredLogger, so every
JSON line carries that session's ID and lifecycle state without any
process-wide context.
"""

import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any

SERVICE_NAME = "medical-dashboard"

# Context keys promoted to top-level JSON fields.
CONTEXT_FIELDS = ("session_id", "phase", "in_flight", "backend_status")


def new_session_id() -> str:
    return str(uuid.uuid4())[:8]


class JSONFormatter(logging.Formatter):
    """One JSON object per record: bound context up top, call data under "data"."""

    def __init__(self, service_name: str = SERVICE_NAME):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        context = dict(getattr(record, "context", None) or {})
        for key in CONTEXT_FIELDS:
            if key in context:
                log_data[key] = context.pop(key)

        data = {**context, **(getattr(record, "extra_data", None) or {})}
        if data:
            log_data["data"] = data

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class StructuredLogger:
    """logging.Logger wrapper carrying bound context plus per-call keyword data.

        log = StructuredLogger(__name__).bind(session_id="a1b2c3d4")
        log.warning("Analysis failed", status_code=502)
    """

    def __init__(self, name: str, **context: Any):
        self.logger = logging.getLogger(name)
        self.context = context

    def bind(self, **context: Any) -> "StructuredLogger":
        """New logger with extra context; this one is left unchanged."""
        return StructuredLogger(self.logger.name, **{**self.context, **context})

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, message, extra={"context": self.context, "extra_data": kwargs})

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)


def setup_logging(level: Any = logging.INFO, use_json: bool = True) -> None:
    """Install a single stderr handler on the root logger.

    Args:
        level: Logging level, as an int or a name such as "DEBUG"
        use_json: Emit JSON lines instead of plain text
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ))

    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
