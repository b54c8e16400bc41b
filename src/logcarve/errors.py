"""Exception taxonomy for logcarve."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logcarve.models import Result


class LogcarveError(Exception):
    """Base class for all logcarve errors."""


class ConfigurationError(LogcarveError, ValueError):
    """Raised at setup time, before any line is processed."""


class PatternError(ConfigurationError):
    """A regex pattern is invalid or has missing/unnamed capture groups."""


class FilterSyntaxError(ConfigurationError):
    """A filter expression cannot be compiled."""

    def __init__(self, expression: str, reason: str) -> None:
        self.expression = expression
        self.reason = reason
        super().__init__(f"invalid filter expression {expression!r}: {reason}")


class SourceError(LogcarveError, OSError):
    """An input source cannot be opened or read.

    For archives, ``results`` holds the Results of entries that completed
    before the failure.
    """

    def __init__(self, message: str, results: list[Result] | None = None) -> None:
        super().__init__(message)
        self.results: list[Result] = results or []


class ParseCancelledError(LogcarveError):
    """Parsing stopped because the cancel event was set.

    ``results`` holds every Result produced so far; the last one is partial.
    """

    def __init__(self, results: list[Result]) -> None:
        super().__init__("parsing cancelled")
        self.results = results

    @property
    def result(self) -> Result | None:
        """The Result of the input that was being processed when cancelled."""
        return self.results[-1] if self.results else None


class ProfileNotFoundError(LogcarveError, FileNotFoundError):
    """No saved profile has the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Profile '{name}' not found")
