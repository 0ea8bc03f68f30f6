"""
Structured logging using structlog.

Provides JSON (or console) log rendering on top of the standard library
``logging`` handlers, correlation ID tracking through a ``ContextVar`` and the
Flask ``g`` object, and request start/finish logging hooks.

Key Features:
- structlog processors chain with ISO timestamps and logger names
- Correlation ID taken from ``X-Correlation-ID`` / ``X-Request-ID`` or generated
- Correlation ID echoed on every response
- Log level and renderer taken from the Flask configuration
"""

import logging
import logging.config
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Callable, Optional

import structlog
from flask import Flask, g, has_request_context, request

# Global correlation ID context variable for request correlation
correlation_id_context: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)
request_start_time_context: ContextVar[Optional[float]] = ContextVar('request_start_time', default=None)

CORRELATION_HEADERS = ('X-Correlation-ID', 'X-Request-ID')


class CorrelationManager:
    """
    Correlation ID management for request tracking.
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._counter = count(1)
                    cls._instance._instance_id = str(uuid.uuid4())[:8]
        return cls._instance

    def generate_correlation_id(self) -> str:
        """
        Generate a unique correlation ID.

        Format: {timestamp}-{instance_id}-{counter}
        Example: 20231201T120000-a1b2c3d4-000001
        """
        with self._lock:
            sequence = next(self._counter)
        timestamp = datetime.now(timezone.utc).strftime('%Y%m%dT%H%M%S')
        return f"{timestamp}-{self._instance_id}-{sequence:06d}"

    def set_correlation_id(self, correlation_id: Optional[str] = None) -> str:
        if correlation_id is None:
            correlation_id = self.generate_correlation_id()

        correlation_id_context.set(correlation_id)
        if has_request_context():
            g.correlation_id = correlation_id
        return correlation_id

    def get_correlation_id(self) -> Optional[str]:
        correlation_id = correlation_id_context.get()
        if correlation_id:
            return correlation_id

        if has_request_context():
            return getattr(g, 'correlation_id', None)
        return None

    def clear_correlation_id(self) -> None:
        correlation_id_context.set(None)
        if has_request_context():
            g.pop('correlation_id', None)


def create_correlation_processor() -> Callable:
    """Create a structlog processor adding the current correlation ID."""
    correlation_manager = CorrelationManager()

    def processor(logger, method_name, event_dict):
        correlation_id = correlation_manager.get_correlation_id()
        if correlation_id and 'correlation_id' not in event_dict:
            event_dict['correlation_id'] = correlation_id
        return event_dict

    return processor


def setup_structured_logging(app: Optional[Flask] = None) -> structlog.stdlib.BoundLogger:
    """
    Configure structlog and the standard library logging handlers.

    Args:
        app: Optional Flask application supplying LOG_LEVEL, LOG_FORMAT and APP_NAME

    Returns:
        Logger bound to the application name
    """
    config = app.config if app is not None else {}
    log_level = config.get('LOG_LEVEL', 'INFO')
    log_format = config.get('LOG_FORMAT', 'json')
    app_name = config.get('APP_NAME', 'request-validator')

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        create_correlation_processor(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == 'console':
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'plain': {'format': '%(message)s'},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'plain',
                'stream': 'ext://sys.stdout',
            },
        },
        'root': {
            'handlers': ['console'],
            'level': log_level,
        },
    })

    logger = structlog.get_logger(app_name)
    logger.info(
        "Structured logging initialized",
        log_level=log_level,
        log_format=log_format
    )
    return logger


def init_request_logging(app: Flask, logger: Optional[structlog.stdlib.BoundLogger] = None) -> None:
    """
    Register request start/finish logging with correlation ID propagation.

    Args:
        app: Flask application instance
        logger: Optional logger, defaults to one named after the application
    """
    if logger is None:
        logger = structlog.get_logger(app.config.get('APP_NAME', 'request-validator'))

    correlation_manager = CorrelationManager()

    @app.before_request
    def start_request_logging():
        correlation_id = None
        for header in CORRELATION_HEADERS:
            correlation_id = request.headers.get(header)
            if correlation_id:
                break
        correlation_manager.set_correlation_id(correlation_id)
        request_start_time_context.set(time.perf_counter())

        logger.debug(
            "Request started",
            method=request.method,
            path=request.path,
            content_length=request.content_length,
            content_type=request.content_type
        )

    @app.after_request
    def finish_request_logging(response):
        start_time = request_start_time_context.get()
        duration_ms = (time.perf_counter() - start_time) * 1000 if start_time else 0.0

        logger.info(
            "Request completed",
            method=request.method,
            path=request.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2)
        )

        correlation_id = correlation_manager.get_correlation_id()
        if correlation_id and 'X-Correlation-ID' not in response.headers:
            response.headers['X-Correlation-ID'] = correlation_id
        return response

    @app.teardown_request
    def clear_request_logging(exc=None):
        correlation_manager.clear_correlation_id()
        request_start_time_context.set(None)


def get_correlation_id() -> Optional[str]:
    return CorrelationManager().get_correlation_id()
