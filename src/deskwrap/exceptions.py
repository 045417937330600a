"""Custom exception hierarchy for deskwrap.

All exceptions that cross layer boundaries must inherit from
:class:`DeskWrapError`.  Raw OS and third-party exceptions (``OSError``
from ``subprocess``, ``yaml.YAMLError``) must never propagate beyond the
infrastructure layer — they are caught and re-raised as a typed
subclass defined here.

Inside the invocation layer these exceptions are converted into
:class:`~deskwrap.core.models.InvocationResult` values; only the CLI
sees them raised (configuration and UI-dependency failures).

Hierarchy
---------
DeskWrapError
├── ExecutableNotFoundError
├── InvalidParameterError
├── SourceFileMissingError
├── ExecutionFailedError
├── ConfigError
└── EnvironmentError
"""

from __future__ import annotations


class DeskWrapError(Exception):
    """Base exception for all deskwrap errors.

    Every user-visible error condition maps to a subclass of this
    exception so that results and the CLI error boundary can render a
    clean message without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Resolution ------------------------------------------------------------

class ExecutableNotFoundError(DeskWrapError):
    """Raised when a utility cannot be located on the search path."""

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(f"{name} is not installed or not on PATH.", hint=hint)
        self.name: str = name


# --- Parameters ------------------------------------------------------------

class InvalidParameterError(DeskWrapError):
    """Raised when a value or mode cannot be formatted into a command."""


class SourceFileMissingError(DeskWrapError):
    """Raised when the input file of a conversion action does not exist."""


# --- Execution -------------------------------------------------------------

class ExecutionFailedError(DeskWrapError):
    """Raised when a process cannot be spawned or exits non-zero."""


# --- Environment / configuration -------------------------------------------

class ConfigError(DeskWrapError):
    """Raised when the configuration file cannot be read or validated."""


class EnvironmentError(DeskWrapError):
    """Raised when an optional runtime dependency is not available."""
