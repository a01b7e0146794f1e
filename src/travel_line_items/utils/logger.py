#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Logging Configuration Module

Every module logs through a child of the "travel_line_items" logger. Entry
points call configure_logging() with the invocation's AppConfig, which
installs the handlers on that package logger: stdout always (serverless
runtimes capture it), a rotating file when a log file path is configured.
"""

import os
import sys
import json
import logging
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional, Tuple

from travel_line_items.config import AppConfig

PACKAGE_LOGGER = "travel_line_items"
INTEGRATION_LOGGER = f"{PACKAGE_LOGGER}.integration"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

# Settings the package logger was last configured with
_active_settings: Optional[Tuple[Any, ...]] = None


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.

    Serverless log collectors index JSON lines without extra parsing rules.
    """

    def __init__(
        self,
        fmt_dict: Optional[Dict[str, Any]] = None,
        time_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        super().__init__()
        self.fmt_dict = fmt_dict or {
            "timestamp": "asctime",
            "level": "levelname",
            "name": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message",
        }
        self.time_format = time_format

    def format(self, record: logging.LogRecord) -> str:
        record.asctime = self.formatTime(record, self.time_format)
        record.message = record.getMessage()

        log_record = {}
        for key, value in self.fmt_dict.items():
            if hasattr(record, value):
                log_record[key] = getattr(record, value)

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record, default=str)


def configure_logging(config: AppConfig) -> logging.Logger:
    """
    Install handlers on the package logger according to config.

    Calling it again with the same settings leaves the handlers alone;
    different settings (or a replaced sys.stdout) rebuild them.

    Args:
        config: Configuration of the current invocation

    Returns:
        The package logger
    """
    global _active_settings

    logger = logging.getLogger(PACKAGE_LOGGER)
    settings = (config.log_level, config.log_file_path, config.json_logs, sys.stdout)
    if settings == _active_settings:
        return logger

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(config.log_level)
    logger.propagate = False
    formatter = JsonFormatter() if config.json_logs else logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.log_file_path is not None:
        os.makedirs(os.path.dirname(os.path.abspath(config.log_file_path)), exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file_path,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _active_settings = settings
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger by name.

    Module loggers (``__name__`` inside the package) inherit the package
    logger's handlers and level.
    """
    return logging.getLogger(name)


def log_integration_event(integration: str, event_type: str, message: str, level: int = logging.INFO) -> None:
    """
    Log an integration event.

    Args:
        integration: Integration name
        event_type: Type of event (create_line_item, delete_line_items, etc.)
        message: Event description
        level: Logging level
    """
    get_logger(INTEGRATION_LOGGER).log(level, f"[{integration}] [{event_type}] {message}")


def mask_value(value: str) -> str:
    """Mask all but the first and last character of a secret."""
    if len(value) > 6:
        return value[0] + "*" * (len(value) - 2) + value[-1]
    return "*" * len(value)


def log_sensitive(logger: logging.Logger, level: int, message: str, **sensitive_data) -> None:
    """
    Log a message while masking sensitive data.

    Args:
        logger: Logger to use
        level: Logging level
        message: Message to log
        sensitive_data: Keys and values to mask in the message
    """
    masked_message = message
    for key, value in sensitive_data.items():
        if value and isinstance(value, str):
            masked_message = masked_message.replace(value, mask_value(value))

    logger.log(level, masked_message)
