"""
Mess Feedback - Logging

Everything logs under the "messfeedback" logger tree. Records are stamped
with the current request id and student id by RequestContextFilter, then
rendered as one JSON object per line in production or as a readable
pipe-separated line elsewhere.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from app.core.config import settings


LOGGER_NAME = "messfeedback"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

# Attributes every LogRecord has; anything else on a record came from ``extra``
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "request_id", "user_id"}

# Libraries that are chatty at INFO
_QUIETED_LOGGERS = ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def set_user_id(user_id: str) -> None:
    user_id_var.set(user_id)


def generate_request_id() -> str:
    """Short id for correlating the lines of one request"""
    return uuid.uuid4().hex[:8]


class RequestContextFilter(logging.Filter):
    """
    Copies request_id and user_id onto each record.

    A user_id passed explicitly through ``extra`` wins over the context
    variable; the access log runs outside the route's context and passes it
    that way.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        if not getattr(record, "user_id", None):
            record.user_id = user_id_var.get() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shippers"""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        for key in ("request_id", "user_id"):
            value = getattr(record, key, "-")
            if value and value != "-":
                entry[key] = value

        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        )

        if record.exc_info and record.exc_info[0]:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


class MessFeedbackLogger(logging.Logger):
    """Logger with helpers for the events this service reports on"""

    def log_auth_event(self, event: str, success: bool, user_email: Optional[str] = None,
                       reason: Optional[str] = None, **kwargs) -> None:
        """Signup/login outcome; never pass the password here"""
        outcome = "ok" if success else "rejected"
        message = f"Auth {event} {outcome}"
        if user_email:
            message += f" for {user_email}"
        if reason:
            message += f": {reason}"

        self.log(
            logging.INFO if success else logging.WARNING,
            message,
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "user_email": user_email,
                "failure_reason": reason,
                **kwargs,
            },
        )

    def log_error_with_context(self, error: Exception, context: Optional[str] = None,
                               **kwargs) -> None:
        self.error(
            f"Unhandled {type(error).__name__} in {context or 'unknown context'}: {error}",
            exc_info=error,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_context": context,
                **kwargs,
            },
        )


def _build_handler(handler: logging.Handler, formatter: logging.Formatter,
                   level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RequestContextFilter())
    return handler


def setup_logging() -> MessFeedbackLogger:
    """Configure the "messfeedback" logger from settings; safe to call twice"""
    logging.setLoggerClass(MessFeedbackLogger)
    log = logging.getLogger(LOGGER_NAME)
    # The logger may predate setLoggerClass if something imported it early
    log.__class__ = MessFeedbackLogger
    log.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    log.handlers.clear()

    json_logs = settings.is_production()
    if json_logs:
        console_formatter = file_formatter = JSONFormatter()
    else:
        console_formatter = logging.Formatter(
            "%(levelname)-8s | [%(request_id)s] %(message)s"
        )
        file_formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | [%(request_id)s] [%(user_id)s] | "
            "%(name)s:%(lineno)d | %(message)s"
        )

    log.addHandler(_build_handler(logging.StreamHandler(sys.stdout), console_formatter, logging.INFO))

    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=10 if json_logs else 5,
        )
        log.addHandler(_build_handler(file_handler, file_formatter, logging.DEBUG))

    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    log.info(
        f"Logging ready ({'json' if json_logs else 'text'}, level {settings.LOG_LEVEL})",
        extra={"environment": settings.ENVIRONMENT},
    )
    return log


logger: MessFeedbackLogger = setup_logging()


__all__ = [
    "logger",
    "setup_logging",
    "set_request_id",
    "set_user_id",
    "generate_request_id",
    "RequestContextFilter",
    "JSONFormatter",
    "MessFeedbackLogger",
]
