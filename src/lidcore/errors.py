"""Exception types raised by lidcore."""

from __future__ import annotations


class LidError(Exception):
    """Base class for lidcore failures."""


class ProfileLoadError(LidError):
    """Raised when a language reference sample cannot be loaded."""

    def __init__(self, language: str, reason: str) -> None:
        super().__init__(f"Cannot load profile for '{language}': {reason}")
        self.language = language
        self.reason = reason


class PoolExhaustedError(LidError):
    """Raised when no identifier could be borrowed from the pool in time."""
