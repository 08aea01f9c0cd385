from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone

from google.cloud import logging as cloud_logging

# Per-request context
trace_id_var: ContextVar[str | None] = ContextVar("trace_id", default=None)
account_id_var: ContextVar[str | None] = ContextVar("account_id", default=None)

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}

_QUIET_LOGGERS = ("google", "urllib3", "httpx")


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, with Cloud Logging's trace key.

    Attributes passed through ``extra=`` are copied to the top level of the
    object, next to the request's account id.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "severity": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        trace_id = trace_id_var.get()
        if trace_id:
            entry["logging.googleapis.com/trace"] = trace_id

        account_id = account_id_var.get()
        if account_id:
            entry["account_id"] = account_id

        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    *,
    environment: str = "dev",
    project_id: str | None = None,
    level: str | None = None,
    use_cloud_logging: bool = True,
) -> None:
    """Configure logging for the API process.

    Args:
        environment: Environment name (dev, staging, prod)
        project_id: GCP project ID for Cloud Logging
        level: Explicit level name, overrides the environment default
        use_cloud_logging: Whether to use Cloud Logging client outside dev
    """
    if level:
        log_level = logging.getLevelName(level.upper())
    else:
        log_level = logging.DEBUG if environment == "dev" else logging.INFO

    if use_cloud_logging and project_id and environment != "dev":
        client = cloud_logging.Client(project=project_id)
        client.setup_logging(log_level=log_level)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logging.basicConfig(level=log_level, handlers=[handler], force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_trace_id(trace_id: str | None) -> None:
    trace_id_var.set(trace_id)


def get_trace_id() -> str | None:
    return trace_id_var.get()


def set_account_id(account_id: str | None) -> None:
    account_id_var.set(account_id)


__all__ = [
    "setup_logging",
    "set_trace_id",
    "get_trace_id",
    "set_account_id",
    "StructuredFormatter",
]
