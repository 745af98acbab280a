"""
Grammar Lint Logging & Errors
=============================
Structured logging and the exception taxonomy for the linter.

Logging is quiet by default (WARNING); the host ``debug`` option lowers
the package loggers to DEBUG.

Environment:
    GRAMMAR_LINT_LOG_LEVEL   DEBUG/INFO/WARNING/ERROR (default WARNING)
    GRAMMAR_LINT_LOG_FORMAT  text/json (default text)
"""

import os
import sys
import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

__version__ = "1.0.0"

PACKAGE_LOGGER = "grammar_lint"
TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s - %(message)s'


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

@dataclass
class LoggingConfig:
    """Logging settings."""
    log_level: str = "WARNING"
    log_format: str = "text"  # Options: json, text
    log_to_console: bool = True

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging configuration from environment variables."""
        return cls(
            log_level=os.environ.get('GRAMMAR_LINT_LOG_LEVEL', 'WARNING').upper(),
            log_format=os.environ.get('GRAMMAR_LINT_LOG_FORMAT', 'text').lower(),
        )


_logging_config: Optional[LoggingConfig] = None
_loggers: Dict[str, 'StructuredLogger'] = {}
_debug_enabled = False


def get_logging_config() -> LoggingConfig:
    global _logging_config
    if _logging_config is None:
        _logging_config = LoggingConfig.from_env()
    return _logging_config


def reset_logging():
    """Drop cached loggers and configuration (for testing)."""
    global _logging_config, _debug_enabled
    _logging_config = None
    _debug_enabled = False
    _loggers.clear()


def set_debug(enabled: bool):
    """Switch every package logger to DEBUG (or back to the configured level)."""
    global _debug_enabled
    _debug_enabled = enabled
    for structured in _loggers.values():
        structured.apply_level()


# =============================================================================
# STRUCTURED LOGGING
# =============================================================================

class StructuredLogger:
    """Logger that attaches keyword context fields to every record."""

    def __init__(self, name: str, config: Optional[LoggingConfig] = None):
        self.name = name
        self.config = config or get_logging_config()
        self._setup_logger()

    def _setup_logger(self):
        """Configure the underlying Python logger."""
        self.logger = logging.getLogger(self.name)
        self.logger.handlers.clear()
        self.apply_level()

        if self.config.log_format == 'json':
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(TEXT_FORMAT)

        if self.config.log_to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)
        # Records stop here; the host owns the root logger.
        self.logger.propagate = False

    def apply_level(self):
        if _debug_enabled:
            self.logger.setLevel(logging.DEBUG)
        else:
            self.logger.setLevel(getattr(logging, self.config.log_level.upper(), logging.WARNING))

    def _emit(self, level: int, message: str, exc_info: bool = False, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        if self.config.log_format != 'json' and kwargs:
            context = ' '.join(f'{key}={value}' for key, value in kwargs.items())
            message = f'{message} [{context}]'
        self.logger.log(level, message, exc_info=exc_info, extra={'context': kwargs})

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._emit(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._emit(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._emit(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        """Log error message with optional exception info."""
        self._emit(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """Log exception with full traceback."""
        self.error(message, exc_info=True, **kwargs)

    @contextmanager
    def log_operation(self, operation: str, **context):
        """Context manager for logging operation start/end with timing."""
        start_time = time.time()
        self.debug(f"{operation} started", operation=operation, status='started', **context)
        try:
            yield
            duration_ms = (time.time() - start_time) * 1000
            self.debug(f"{operation} completed", operation=operation, status='completed',
                       duration_ms=round(duration_ms, 2), **context)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            self.error(f"{operation} failed: {e}", operation=operation, status='failed',
                       duration_ms=round(duration_ms, 2), **context)
            raise


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if record.exc_info:
            log_data['traceback'] = self.formatException(record.exc_info)

        context = getattr(record, 'context', None)
        if context:
            for key, value in context.items():
                log_data[key] = value if isinstance(value, (str, int, float, bool, type(None))) else str(value)

        return json.dumps(log_data)


def get_logger(name: str) -> StructuredLogger:
    """Get a (cached) structured logger instance."""
    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, get_logging_config())
    return _loggers[name]


# =============================================================================
# ERROR HANDLING
# =============================================================================

class GrammarLintError(Exception):
    """Base exception for grammar-lint."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR",
                 details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a report-friendly dict."""
        return {
            'success': False,
            'error': {
                'code': self.code,
                'message': self.message,
                'details': self.details
            }
        }


class ConfigurationError(GrammarLintError):
    """Invalid rule options."""
    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, code="CONFIGURATION_ERROR",
                         details={'field': field, **kwargs})


class DictionaryError(GrammarLintError):
    """Spelling dictionary could not be loaded."""
    def __init__(self, message: str, language: Optional[str] = None, **kwargs):
        super().__init__(message, code="DICTIONARY_ERROR",
                         details={'language': language, **kwargs})


class GrammarServiceError(GrammarLintError):
    """The grammar service failed or timed out for one text unit."""
    def __init__(self, message: str, text: Optional[str] = None, **kwargs):
        super().__init__(message, code="GRAMMAR_SERVICE_ERROR",
                         details={'text': text, **kwargs})
