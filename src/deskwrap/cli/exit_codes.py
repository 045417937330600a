"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the utility completed or was launched."""

GENERAL_ERROR: int = 1
"""A known DeskWrapError or a failed invocation. A message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

EXECUTABLE_NOT_FOUND: int = 127
"""The wrapped utility is not installed.  Mirrors the shell's 127."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
