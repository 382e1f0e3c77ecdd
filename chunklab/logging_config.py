"""
Logging configuration for the chunklab library.

This module provides centralized logging configuration with support for:
- User-facing status messages (warnings about clamped options, fallbacks)
- Developer debug logs for individual pipeline operations
- Performance timing logs
- Console, rotating file and JSON output

Nothing is configured on import. Library modules only call ``get_logger``;
applications (and the CLI) call ``configure_logging`` once.
"""

import json
import logging
import logging.handlers
import sys
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Union

USER_LOGGER = "chunklab.user"
DEBUG_LOGGER = "chunklab.debug"
PERFORMANCE_LOGGER = "chunklab.performance"
MAX_PERFORMANCE_RECORDS = 1000

_STANDARD_RECORD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'stack_info',
    'exc_info', 'exc_text', 'taskName', 'message',
}


class LogLevel(Enum):
    """Logging levels with user-friendly names."""
    SILENT = "silent"      # Only critical errors
    MINIMAL = "minimal"    # Bare messages, no timestamps
    NORMAL = "normal"      # Standard logging for users
    VERBOSE = "verbose"    # Adds performance logs
    DEBUG = "debug"        # Full debugging information
    TRACE = "trace"        # Maximum verbosity for development


@dataclass
class LogConfig:
    """Configuration for logging behavior."""
    level: LogLevel = LogLevel.NORMAL
    console_output: bool = True
    file_output: bool = False
    log_file: Optional[Path] = None
    collect_performance: bool = False
    format_json: bool = False
    include_module_names: bool = True
    max_file_size: str = "10MB"
    backup_count: int = 3

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = asdict(self)
        result['level'] = self.level.value
        if self.log_file:
            result['log_file'] = str(self.log_file)
        return result


class ChunkLabLogger:
    """Centralized logger for the chunklab library."""

    _instance = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self.config = LogConfig()
        self.loggers: Dict[str, logging.Logger] = {}
        self.performance_logs: Deque[Dict[str, Any]] = deque(maxlen=MAX_PERFORMANCE_RECORDS)
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self._handlers: List[logging.Handler] = []

    def configure(self, config: Optional[LogConfig] = None, **kwargs) -> None:
        """
        Configure logging behavior.

        Args:
            config: LogConfig object with settings
            **kwargs: Individual config parameters overriding ``config``
        """
        if config:
            self.config = config

        config_dict = {
            'level': self.config.level,
            'console_output': self.config.console_output,
            'file_output': self.config.file_output,
            'log_file': self.config.log_file,
            'collect_performance': self.config.collect_performance,
            'format_json': self.config.format_json,
            'include_module_names': self.config.include_module_names,
            'max_file_size': self.config.max_file_size,
            'backup_count': self.config.backup_count
        }

        for key, value in kwargs.items():
            if key not in config_dict:
                continue
            if key == 'level' and isinstance(value, str):
                value = LogLevel(value.lower())
            elif key == 'log_file' and value:
                value = Path(value)
            config_dict[key] = value

        self.config = LogConfig(**config_dict)
        self._configure_logging()

    def _configure_logging(self) -> None:
        """Attach handlers to the ``chunklab`` logger based on current configuration."""
        package_logger = logging.getLogger("chunklab")
        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        level = self._get_python_log_level(self.config.level)
        package_logger.setLevel(level)

        if self.config.format_json:
            formatter = JsonFormatter()
        else:
            formatter = self._create_text_formatter()

        if self.config.console_output:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            console_handler.setLevel(level)
            self._handlers.append(console_handler)

        if self.config.file_output and self.config.log_file:
            self.config.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                self.config.log_file,
                maxBytes=self._parse_size(self.config.max_file_size),
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(level)
            self._handlers.append(file_handler)

        for handler in self._handlers:
            package_logger.addHandler(handler)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger instance for the specified module.

        Args:
            name: Module name (usually __name__)

        Returns:
            Logger instance
        """
        if name not in self.loggers:
            self.loggers[name] = logging.getLogger(name)
        return self.loggers[name]

    def user_info(self, message: str, **kwargs) -> None:
        """Log user-facing informational message."""
        if self.config.level != LogLevel.SILENT:
            self.get_logger(USER_LOGGER).info(message, extra={'user_message': True, **kwargs})

    def user_success(self, message: str, **kwargs) -> None:
        """Log user-facing success message."""
        if self.config.level != LogLevel.SILENT:
            self.get_logger(USER_LOGGER).info(f"OK: {message}", extra={'user_message': True, **kwargs})

    def user_warning(self, message: str, **kwargs) -> None:
        """Log user-facing warning message."""
        self.get_logger(USER_LOGGER).warning(message, extra={'user_message': True, **kwargs})

    def debug_operation(self, operation: str, details: Dict[str, Any], **kwargs) -> None:
        """Log detailed operation information for debugging."""
        if self.config.level in (LogLevel.DEBUG, LogLevel.TRACE):
            self.get_logger(DEBUG_LOGGER).debug(
                operation, extra={'operation': operation, 'details': details, **kwargs}
            )

    def performance_log(self, operation: str, duration: float, **kwargs) -> None:
        """Record a timing and log it at verbose levels."""
        if not self.config.collect_performance:
            return
        perf_data = {
            'timestamp': datetime.now().isoformat(),
            'operation': operation,
            'duration_seconds': duration,
            'session_id': self.session_id,
            **kwargs
        }
        self.performance_logs.append(perf_data)

        if self.config.level in (LogLevel.VERBOSE, LogLevel.DEBUG, LogLevel.TRACE):
            self.get_logger(PERFORMANCE_LOGGER).info(f"{operation}: {duration:.3f}s", extra=perf_data)

    def _get_python_log_level(self, level: LogLevel) -> int:
        """Convert our log level to Python logging level."""
        mapping = {
            LogLevel.SILENT: logging.CRITICAL,
            LogLevel.MINIMAL: logging.WARNING,
            LogLevel.NORMAL: logging.INFO,
            LogLevel.VERBOSE: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.TRACE: logging.DEBUG
        }
        return mapping.get(level, logging.INFO)

    def _create_text_formatter(self) -> logging.Formatter:
        """Create human-readable text formatter."""
        if self.config.level == LogLevel.MINIMAL:
            fmt = '%(message)s'
        elif self.config.include_module_names:
            fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        else:
            fmt = '%(asctime)s - %(levelname)s - %(message)s'
        return logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S')

    def _parse_size(self, size_str: Union[str, int]) -> int:
        """Parse size string like '10MB' to bytes."""
        if not isinstance(size_str, str):
            return int(size_str)

        size_str = size_str.strip().upper()
        for suffix, multiplier in (('GB', 1024**3), ('MB', 1024**2), ('KB', 1024), ('B', 1)):
            if size_str.endswith(suffix):
                return int(float(size_str[:-len(suffix)]) * multiplier)
        return int(size_str)


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'module': record.name,
            'message': record.getMessage(),
            'line_number': record.lineno,
            'function': record.funcName
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        extra_fields = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_RECORD_FIELDS}
        if extra_fields:
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


# Global logger instance
_logger = ChunkLabLogger()


def get_logger(name: str = "chunklab") -> logging.Logger:
    """
    Get a logger for the chunklab library.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return _logger.get_logger(name)


def configure_logging(level: Union[str, LogLevel] = LogLevel.NORMAL, **kwargs) -> None:
    """
    Configure library-wide logging.

    Args:
        level: Logging level
        **kwargs: Additional LogConfig fields
    """
    if isinstance(level, str):
        level = LogLevel(level.lower())

    _logger.configure(level=level, **kwargs)


def user_info(message: str, **kwargs) -> None:
    """Log user-facing informational message."""
    _logger.user_info(message, **kwargs)


def user_success(message: str, **kwargs) -> None:
    """Log user-facing success message."""
    _logger.user_success(message, **kwargs)


def user_warning(message: str, **kwargs) -> None:
    """Log user-facing warning message."""
    _logger.user_warning(message, **kwargs)


def debug_operation(operation: str, details: Dict[str, Any], **kwargs) -> None:
    """Log detailed operation information for debugging."""
    _logger.debug_operation(operation, details, **kwargs)


def performance_log(operation: str, duration: float, **kwargs) -> None:
    """Log performance metrics."""
    _logger.performance_log(operation, duration, **kwargs)
