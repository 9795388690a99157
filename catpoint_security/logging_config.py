"""Centralized logging configuration for the Catpoint security system."""

import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from .config.defaults import SYSTEM_CONSTANTS

ROOT_LOGGER_NAME = "catpoint"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends component context to log records."""

    def __init__(self, include_context: bool = True):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        base_format = "%(asctime)s | %(levelname)-8s | %(name)-28s | %(message)s"

        if self.include_context and hasattr(record, 'context'):
            context_str = " | ".join([f"{k}={v}" for k, v in record.context.items()])
            base_format += f" | Context: {context_str}"

        if record.levelno >= logging.ERROR and record.exc_info:
            base_format += " | %(pathname)s:%(lineno)d"

        formatter = logging.Formatter(base_format)
        return formatter.format(record)


class ContextFilter(logging.Filter):
    """Filter that stamps process and component information on records."""

    def __init__(self, component_name: Optional[str] = None):
        super().__init__()
        self.component_name = component_name
        self.process_id = os.getpid()

    def filter(self, record: logging.LogRecord) -> bool:
        record.process_id = self.process_id
        if self.component_name:
            record.component = self.component_name
        return True


class LoggingManager:
    """Owns the handlers attached to the ``catpoint`` logger tree."""

    def __init__(self, log_dir: Optional[str] = "logs", log_level: int = logging.INFO):
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = log_level
        self.max_log_size = SYSTEM_CONSTANTS["LOG_ROTATION_SIZE_MB"] * 1024 * 1024
        self.backup_count = SYSTEM_CONSTANTS["LOG_BACKUP_COUNT"]

        self.main_log_file = self.log_dir / "catpoint.log" if self.log_dir else None
        self.error_log_file = self.log_dir / "errors.log" if self.log_dir else None

        self._setup_root_logger()

    def _setup_root_logger(self) -> None:
        """Attach console and rotating file handlers to the package logger."""
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(self.log_level)

        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(self.log_level)
        console_handler.setFormatter(StructuredFormatter(include_context=False))
        root_logger.addHandler(console_handler)

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)

        main_file_handler = logging.handlers.RotatingFileHandler(
            self.main_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        main_file_handler.setLevel(logging.DEBUG)
        main_file_handler.setFormatter(StructuredFormatter(include_context=True))
        root_logger.addHandler(main_file_handler)

        error_file_handler = logging.handlers.RotatingFileHandler(
            self.error_log_file,
            maxBytes=self.max_log_size,
            backupCount=self.backup_count
        )
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(StructuredFormatter(include_context=True))
        root_logger.addHandler(error_file_handler)

        root_logger.debug(f"Logging initialized in {self.log_dir}")

    def get_log_stats(self) -> Dict[str, Any]:
        """Get logging statistics."""
        stats: Dict[str, Any] = {
            "log_directory": str(self.log_dir) if self.log_dir else None,
            "log_files": {},
            "log_level": logging.getLevelName(self.log_level)
        }

        for log_file in [self.main_log_file, self.error_log_file]:
            if log_file is not None and log_file.exists():
                stats["log_files"][log_file.name] = {
                    "size_mb": log_file.stat().st_size / (1024 * 1024),
                    "modified": datetime.fromtimestamp(log_file.stat().st_mtime).isoformat()
                }

        return stats


logging_manager: Optional[LoggingManager] = None
_component_loggers: Dict[str, logging.Logger] = {}


def get_logger(component_name: str) -> logging.Logger:
    """Get or create the logger for a component."""
    if component_name in _component_loggers:
        return _component_loggers[component_name]

    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")
    logger.addFilter(ContextFilter(component_name))
    _component_loggers[component_name] = logger
    return logger


def log_with_context(logger: logging.Logger, level: int, message: str,
                     context: Optional[Dict[str, Any]] = None) -> None:
    """Log message with additional context information."""
    if context:
        logger.log(level, message, extra={'context': context})
    else:
        logger.log(level, message)


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs") -> LoggingManager:
    """Setup centralized logging. Pass ``log_dir=None`` for console only."""
    global logging_manager

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging_manager = LoggingManager(log_dir, numeric_level)
    return logging_manager
