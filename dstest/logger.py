"""
Centralized logging system for DSTest.

Module loggers are children of the ``dstest`` logger, which owns the only
handler. Output is either structured JSON lines (with sensitive values
redacted) or a simple human-readable format.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dstest.config import settings

ROOT_LOGGER_NAME = "dstest"

_RESERVED_ATTRS = {
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName",
}

SENSITIVE_KEYS = {
    "api_key", "apikey", "key", "token", "password", "secret",
    "authorization", "auth", "credential",
}


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logging.
    
    Converts log records to structured JSON format with consistent fields
    and optional sanitization of sensitive data.
    """
    
    def __init__(self, sanitize: bool = True):
        """
        Initialize the structured formatter.
        
        Args:
            sanitize: Whether to sanitize sensitive information from logs
        """
        super().__init__()
        self.sanitize = sanitize
    
    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as structured JSON.
        
        Args:
            record: The log record to format
            
        Returns:
            str: JSON-formatted log entry
        """
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        
        # Fields passed through ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value
        
        if self.sanitize:
            log_entry = self._sanitize_log_entry(log_entry)
        
        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)
    
    def _sanitize_log_entry(self, log_entry: Dict[str, Any]) -> Dict[str, Any]:
        """
        Redact values stored under sensitive keys.
        
        Args:
            log_entry: The log entry dictionary to sanitize
            
        Returns:
            Dict[str, Any]: Sanitized log entry
        """
        def sanitize_value(obj: Any) -> Any:
            if isinstance(obj, dict):
                return {
                    k: "[REDACTED]" if k.lower() in SENSITIVE_KEYS else sanitize_value(v)
                    for k, v in obj.items()
                }
            elif isinstance(obj, list):
                return [sanitize_value(item) for item in obj]
            return obj
        
        return sanitize_value(log_entry)


class SimpleFormatter(logging.Formatter):
    """Simple, human-readable formatter for development use."""
    
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logger(
    name: Optional[str] = None,
    level: Optional[str] = None,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.
    
    Calling this again with an explicit level or format reconfigures the
    existing handler, which is how the CLI switches to verbose output.
    
    Args:
        name: Logger name (defaults to 'dstest')
        level: Log level (defaults to settings.log_level)
        log_format: Format type ('structured' or 'simple', defaults to settings.log_format)
        
    Returns:
        logging.Logger: Configured logger instance
    """
    logger_name = name or ROOT_LOGGER_NAME
    log_level = (level or settings.log_level).upper()
    format_type = log_format or settings.log_format
    
    logger = logging.getLogger(logger_name)
    
    if logger.handlers and level is None and log_format is None:
        return logger
    
    if format_type == "structured":
        formatter: logging.Formatter = StructuredFormatter(sanitize=settings.sanitize_logs)
    else:
        formatter = SimpleFormatter()
    
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler(sys.stdout))
    
    logger.setLevel(getattr(logging, log_level))
    for handler in logger.handlers:
        handler.setLevel(getattr(logging, log_level))
        handler.setFormatter(formatter)
    
    # Prevent duplicate logs from the root logger
    logger.propagate = False
    
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the ``dstest`` hierarchy.
    
    Args:
        name: Logger name, usually ``__name__`` of the calling module
        
    Returns:
        logging.Logger: Logger that propagates to the configured root
    """
    setup_logger()
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


# Create the global logger instance
logger = setup_logger()
