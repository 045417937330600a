"""Domain models for deskwrap.

All models are **frozen** dataclasses or enums — immutable value objects
with no behaviour beyond data access and a few derived properties.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from deskwrap.exceptions import (
    DeskWrapError,
    ExecutableNotFoundError,
    InvalidParameterError,
    SourceFileMissingError,
)


# ---------------------------------------------------------------------------
# Closed variant sets
# ---------------------------------------------------------------------------

class ExecutionMode(str, Enum):
    """How an external utility is started."""

    SYNCHRONOUS = "synchronous"
    """Spawn, block until exit, observe the exit status."""

    ASYNCHRONOUS = "asynchronous"
    """Spawn through ``/bin/sh -c`` and return immediately."""

    FIRE_AND_FORGET = "fire-and-forget"
    """Spawn the executable directly, no shell, no wait."""


class VolumeMode(str, Enum):
    """Volume adjustment mode and the argument prefix it carries."""

    SET = "set"
    RAISE = "raise"
    LOWER = "lower"

    @property
    def prefix(self) -> str:
        return _VOLUME_PREFIXES[self]


_VOLUME_PREFIXES: dict[VolumeMode, str] = {
    VolumeMode.SET: "",
    VolumeMode.RAISE: "+",
    VolumeMode.LOWER: "-",
}


class ActionName(str, Enum):
    """Every user-facing action, named as on the command line."""

    SET_TRANSPARENCY = "set-transparency"
    SET_WINDOW_TRANSPARENCY = "set-window-transparency"
    CAPTURE_SCREEN = "capture-screen"
    LOCK_SCREEN = "lock-screen"
    SET_VOLUME = "set-volume"
    RAISE_VOLUME = "raise-volume"
    LOWER_VOLUME = "lower-volume"
    MUTE_AUDIO = "mute-audio"
    EXPORT_PDF_TO_TEXT = "export-pdf-to-text"


class OutcomeKind(str, Enum):
    """Terminal state of one invocation."""

    SUCCESS = "success"
    LAUNCHED = "launched"
    EXECUTABLE_NOT_FOUND = "executable-not-found"
    INVALID_PARAMETER = "invalid-parameter"
    SOURCE_FILE_MISSING = "source-file-missing"
    EXECUTION_FAILED = "execution-failed"


# ---------------------------------------------------------------------------
# Action descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Action:
    """A named operation bound to one external utility."""

    name: ActionName
    executable: str
    """Program name (searched on PATH) or explicit path."""

    arguments: str
    """Default argument string, split with POSIX shell rules."""

    mode: ExecutionMode


# ---------------------------------------------------------------------------
# Request / result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class InvocationRequest:
    """One fully formatted call to an external utility."""

    executable: str
    arguments: tuple[str, ...]
    mode: ExecutionMode
    working_directory: Path | None = None


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Exit status of a synchronous run."""

    returncode: int
    stderr: str = ""


_ERROR_KINDS: tuple[tuple[type[DeskWrapError], OutcomeKind], ...] = (
    (ExecutableNotFoundError, OutcomeKind.EXECUTABLE_NOT_FOUND),
    (InvalidParameterError, OutcomeKind.INVALID_PARAMETER),
    (SourceFileMissingError, OutcomeKind.SOURCE_FILE_MISSING),
)


@dataclass(frozen=True, slots=True)
class InvocationResult:
    """Uniform outcome handed back to the caller for display."""

    kind: OutcomeKind
    message: str
    output_location: Path | None = None
    hint: str | None = None
    request: InvocationRequest | None = None

    @property
    def ok(self) -> bool:
        """``True`` for a completed run or an acknowledged launch."""
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.LAUNCHED)

    @classmethod
    def from_error(
        cls,
        exc: DeskWrapError,
        *,
        request: InvocationRequest | None = None,
    ) -> InvocationResult:
        """Map a domain exception onto its outcome kind.

        Anything not listed explicitly (including
        :class:`~deskwrap.exceptions.ExecutionFailedError`) is reported
        as ``execution-failed``.
        """
        kind = OutcomeKind.EXECUTION_FAILED
        for exc_type, mapped in _ERROR_KINDS:
            if isinstance(exc, exc_type):
                kind = mapped
                break
        return cls(kind=kind, message=str(exc), hint=exc.hint, request=request)
