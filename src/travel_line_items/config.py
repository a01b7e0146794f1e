#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration management for the travel line-item functions.

Values come from environment variables (a local .env file is loaded first for
development). A fresh AppConfig is built for every function invocation so
nothing is carried across invocations that happen to share a process.
"""

import os
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from travel_line_items.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

ACCESS_TOKEN_ENV = "PRIVATE_APP_ACCESS_TOKEN"

# Log levels
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class AppConfig:
    """Application configuration."""

    # HubSpot
    access_token: Optional[str] = field(
        default_factory=lambda: os.getenv(ACCESS_TOKEN_ENV)
    )
    max_workers: int = field(
        default_factory=lambda: int(os.getenv("HUBSPOT_MAX_WORKERS", "8"))
    )

    # Logging
    log_level: int = field(
        default_factory=lambda: LOG_LEVELS.get(
            os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO
        )
    )
    log_file_path: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["LOG_FILE_PATH"]) if os.getenv("LOG_FILE_PATH") else None
    )
    json_logs: bool = field(default_factory=lambda: _env_flag("LOG_JSON", "false"))

    # Behaviour
    reject_past_dates: bool = field(
        default_factory=lambda: _env_flag("REJECT_PAST_DATES", "true")
    )
    reconcile_meeting_associations: bool = field(
        default_factory=lambda: _env_flag("MEETING_RECONCILE_ASSOCIATIONS", "true")
    )

    def validate(self) -> List[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid
        """
        errors = []

        if not self.access_token:
            errors.append(f"{ACCESS_TOKEN_ENV} is required")

        if self.max_workers <= 0:
            errors.append("HUBSPOT_MAX_WORKERS must be positive")

        if self.log_file_path is not None and not self.log_file_path.parent.exists():
            errors.append(f"Log file path parent does not exist: {self.log_file_path.parent}")

        return errors

    def require_access_token(self) -> str:
        """
        Return the private app token or fail before any network call is made.

        Raises:
            ConfigurationError: If the token is not configured
        """
        if not self.access_token:
            raise ConfigurationError(f"{ACCESS_TOKEN_ENV} is not configured")
        return self.access_token


def get_config() -> AppConfig:
    """Read configuration for the current invocation."""
    return AppConfig()
