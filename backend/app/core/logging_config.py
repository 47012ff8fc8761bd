"""
Portal logging configuration.

Development gets readable single-line records; production emits JSON so the
state data centre's log shipper can index request, user and district fields.
"""

import logging
import sys
import json
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional
from contextvars import ContextVar

from app.core.config import settings


# Request-scoped tracing context, reset by RequestLoggingMiddleware
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')
district_var: ContextVar[str] = ContextVar('district', default='')

_RESERVED_RECORD_KEYS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'exc_info', 'exc_text',
    'thread', 'threadName', 'message', 'taskName',
})


def get_request_id() -> str:
    return request_id_var.get() or ''


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def get_user_id() -> str:
    return user_id_var.get() or ''


def set_user_id(user_id: str) -> None:
    user_id_var.set(user_id)


def get_district() -> str:
    return district_var.get() or ''


def set_district(district: Optional[str]) -> None:
    district_var.set(district or '')


def clear_log_context() -> None:
    """Reset every tracing variable at the end of a request"""
    set_request_id('')
    set_user_id('')
    set_district('')


def generate_request_id() -> str:
    """Short request id for log correlation"""
    return uuid.uuid4().hex[:8]


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with tracing context and extras merged in"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in (
            ("request_id", get_request_id()),
            ("user_id", get_user_id()),
            ("district", get_district()),
        ):
            if value:
                log_data[key] = value

        if record.exc_info and record.exc_info[0]:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_RECORD_KEYS and not key.startswith('_'):
                log_data.setdefault(key, value)

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """Plain-text formatter that exposes request_id, user_id and district to the format string"""

    def format(self, record: logging.LogRecord) -> str:
        record.request_id = get_request_id() or '-'
        record.user_id = get_user_id() or '-'
        record.district = get_district() or '-'
        return super().format(record)


class PortalLogger(logging.Logger):
    """Logger with helpers for the events the portal audits"""

    def log_request(self, method: str, path: str, status_code: int,
                    duration_ms: float, **kwargs) -> None:
        """Completed request; 4xx logs at WARNING and 5xx at ERROR"""
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        self.log(
            level,
            f"{method} {path} - {status_code} ({duration_ms:.2f}ms)",
            extra={
                "event_type": "http_request_complete",
                "http_method": method,
                "http_path": path,
                "http_status": status_code,
                "duration_ms": duration_ms,
                **kwargs
            }
        )

    def log_auth_event(self, event: str, success: bool, username: str = None,
                       reason: str = None, **kwargs) -> None:
        """Login, signup and token refresh outcomes; failures log at WARNING"""
        level = logging.INFO if success else logging.WARNING
        message = f"Auth {event}: {'success' if success else 'failed'}"
        if username:
            message += f" - {username}"
        if reason:
            message += f" - {reason}"
        self.log(
            level,
            message,
            extra={
                "event_type": "auth",
                "auth_event": event,
                "auth_success": success,
                "username": username,
                "failure_reason": reason,
                **kwargs
            }
        )

    def log_workflow_event(self, entity: str, entity_id: str, from_status: str,
                           to_status: str, actor_id: str = None, **kwargs) -> None:
        """Status transition on a volunteer, incident, assignment or training session"""
        self.info(
            f"[{entity}] {entity_id}: {from_status} -> {to_status}",
            extra={
                "event_type": "workflow_transition",
                "entity": entity,
                "entity_id": entity_id,
                "from_status": from_status,
                "to_status": to_status,
                "actor_id": actor_id,
                **kwargs
            }
        )

    def log_error_with_context(self, error: Exception, context: str = None,
                               **kwargs) -> None:
        self.error(
            f"Error in {context}: {type(error).__name__}: {error}",
            exc_info=True,
            extra={
                "event_type": "error",
                "error_type": type(error).__name__,
                "error_message": str(error),
                "error_context": context,
                **kwargs
            }
        )


def _file_handler(formatter: logging.Formatter, backup_count: int) -> RotatingFileHandler:
    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=10485760, backupCount=backup_count)  # 10MB
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging() -> PortalLogger:
    """Configure the "portal" logger for the current environment"""
    logging.setLoggerClass(PortalLogger)

    logger = logging.getLogger("portal")
    logger.__class__ = PortalLogger
    logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    logger.handlers.clear()

    if settings.is_production:
        console_formatter = file_formatter = JSONFormatter()
        backup_count = 10
    else:
        console_formatter = ContextualFormatter("%(levelname)-8s | [%(request_id)s] %(message)s")
        file_formatter = ContextualFormatter(
            "%(asctime)s | %(levelname)-8s | "
            "[%(request_id)s] [%(user_id)s] [%(district)s] | "
            "%(name)s:%(lineno)d | %(message)s"
        )
        backup_count = 5

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        logger.addHandler(_file_handler(file_formatter, backup_count))

    # Suppress noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logger.debug(
        "Logging initialized",
        extra={
            "environment": settings.ENVIRONMENT,
            "log_level": settings.LOG_LEVEL,
            "json_logging": settings.is_production
        }
    )

    return logger


logger: PortalLogger = setup_logging()


def get_logger(name: str) -> logging.Logger:
    """Child of the portal logger so module records share its handlers"""
    return logging.getLogger(f"portal.{name}")


__all__ = [
    'logger',
    'get_logger',
    'setup_logging',
    'get_request_id',
    'set_request_id',
    'get_user_id',
    'set_user_id',
    'get_district',
    'set_district',
    'clear_log_context',
    'generate_request_id',
    'PortalLogger',
]
