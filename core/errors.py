"""Exception types raised by the CRUD pipeline."""

from __future__ import annotations


class CrudError(Exception):
    """Base class for pipeline errors."""


class ActionNotMapped(CrudError, LookupError):
    """Raised when an action has no handler-kind mapping."""

    def __init__(self, action: str) -> None:
        super().__init__(f'Action "{action}" has not been mapped')
        self.action = action


class ConfigError(CrudError, ValueError):
    """Raised for invalid pipeline configuration."""
