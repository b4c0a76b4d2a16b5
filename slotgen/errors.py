"""
Base exceptions for user-facing errors.

Everything the CLI should report as a clean one-line message (broken config
files, unreadable data files, unknown page names) inherits from
SlotgenUserError. Bugs are not wrapped and keep their tracebacks.

The rendering core itself never raises for malformed templates or data:
those degrade to literal text and are reported through logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SlotgenUserError(Exception):
    """
    Base class for all user-facing errors in the slot generator.

    These errors indicate problems the user can fix: configuration
    issues, missing files, invalid page names.
    """
    pass


@dataclass
class ConfigError(SlotgenUserError):
    """Store configuration file exists but cannot be used."""
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Invalid config file {self.path}: {self.reason}"


@dataclass
class DataFileError(SlotgenUserError):
    """Raw page data (or template) passed on the command line cannot be read."""
    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Cannot read {self.path}: {self.reason}"


@dataclass
class UnknownPageError(SlotgenUserError):
    """Public URL requested for a page name that has no route."""
    page_name: str
    hint: Optional[str] = None

    def __str__(self) -> str:
        msg = f"Unknown page name: '{self.page_name}'"
        if self.hint:
            msg += f" ({self.hint})"
        return msg


__all__ = ["SlotgenUserError", "ConfigError", "DataFileError", "UnknownPageError"]
