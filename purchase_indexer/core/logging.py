# purchase_indexer/core/logging.py
"""
Centralized logging system for the purchase indexer.

Provides:
- IndexerLogger: Global logging configuration
- LoggingMixin: Consistent logging behavior for classes
- Utility functions: Context logging helpers
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime


ROOT_LOGGER_NAME = 'purchase_indexer'

CONTEXT_ATTRS = (
    'network', 'chain_id', 'from_block', 'to_block', 'block_number',
    'tx_hash', 'event_count', 'network_count', 'limit', 'receiver',
    'error', 'exception_type',
)


class IndexerFormatter(logging.Formatter):
    def __init__(self, include_context: bool = False, structured: bool = False):
        self.include_context = include_context
        self.structured = structured
        super().__init__()

    def _context(self, record: logging.LogRecord) -> dict:
        if not self.include_context:
            return {}
        return {
            attr: getattr(record, attr)
            for attr in CONTEXT_ATTRS
            if hasattr(record, attr)
        }

    def format(self, record: logging.LogRecord) -> str:
        context = self._context(record)

        if self.structured:
            log_entry = {
                'timestamp': datetime.fromtimestamp(record.created).isoformat(),
                'level': record.levelname,
                'logger': record.name,
                'message': record.getMessage(),
            }
            if context:
                log_entry['context'] = context
            if record.exc_info:
                log_entry['exception'] = self.formatException(record.exc_info)
            return json.dumps(log_entry, separators=(',', ':'), default=str)

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        base_msg = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if context:
            parts = ' '.join(f"{key}={value}" for key, value in context.items())
            base_msg = f"{base_msg} | {parts}"

        if record.exc_info:
            base_msg = f"{base_msg}\n{self.formatException(record.exc_info)}"

        return base_msg


class IndexerLogger:
    """Global logging configuration and management"""

    _configured = False
    _log_dir: Optional[Path] = None
    _log_level = logging.INFO

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = False,
                  structured_format: bool = False,
                  force: bool = False) -> None:

        if cls._configured and not force:
            return

        level = getattr(logging, log_level.upper(), None)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        cls._log_dir = log_dir
        cls._log_level = level

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(cls._log_level)
        root_logger.handlers.clear()

        if console_enabled:
            # stderr keeps stdout free for command output
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(cls._log_level)
            console_handler.setFormatter(
                IndexerFormatter(include_context=True, structured=structured_format)
            )
            root_logger.addHandler(console_handler)

        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_formatter = IndexerFormatter(include_context=True, structured=True)

            file_handler = logging.FileHandler(log_dir / 'purchase_indexer.log')
            file_handler.setLevel(cls._log_level)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / 'purchase_indexer_errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'

        return logging.getLogger(name)


# === Utility Functions ===

def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__

    prefix = f'{ROOT_LOGGER_NAME}.'
    if module.startswith(prefix):
        module = module[len(prefix):]

    return IndexerLogger.get_logger(f"{module}.{class_name}")


def log_with_context(logger: logging.Logger, level: int, message: str,
                     exc_info: bool = False, **context) -> None:
    if logger.isEnabledFor(level):
        logger.log(level, message, exc_info=exc_info, extra=context)


# === LoggingMixin for Classes ===

class LoggingMixin:
    """
    Mixin to add consistent logging behavior to any class.

    Loggers are created lazily per class and every helper accepts
    structured context as keyword arguments.
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.WARNING, message, **context)

    def log_error(self, message: str, exc_info: bool = False, **context) -> None:
        log_with_context(self.logger, logging.ERROR, message, exc_info=exc_info, **context)
