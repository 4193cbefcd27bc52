"""Application-level exception types for devconsole."""

from __future__ import annotations


class DevConsoleError(Exception):
    """Base exception for devconsole."""


class ConfigurationError(DevConsoleError):
    """Base exception for configuration and startup validation errors."""


class DuplicateCommandError(ConfigurationError):
    """Raised when two commands share a name (case-insensitive)."""

    def __init__(self, name: str) -> None:
        super().__init__(f"duplicate command name: {name}")
        self.name = name


class StoreError(DevConsoleError):
    """Raised when the key/value store cannot be written."""


class CommandUsageError(DevConsoleError):
    """Raised by handlers to report bad arguments."""
