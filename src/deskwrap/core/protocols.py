"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the invocation layer can be exercised with fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from deskwrap.core.models import RunOutcome


class ExecutableResolver(Protocol):
    """Contract for locating a program on the executable search path."""

    def resolve(self, name: str, search_path: Sequence[str] | None = None) -> Path:
        """Return the resolved path of *name*.

        Parameters
        ----------
        name:
            Program name, or a path when it contains a separator.
        search_path:
            Directories to search instead of ``$PATH``.

        Raises
        ------
        ExecutableNotFoundError
            When *name* cannot be located.  Implementations must never
            substitute an alternate binary.
        """
        ...  # pragma: no cover


class ProcessExecutor(Protocol):
    """Contract for starting external processes.

    Implementations must map OS-level spawn failures to
    :class:`~deskwrap.exceptions.ExecutionFailedError`.
    """

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> RunOutcome:
        """Run *argv* without a shell and block until it exits."""
        ...  # pragma: no cover

    def spawn_shell(self, command: str, *, cwd: Path | None = None) -> int:
        """Start *command* through ``/bin/sh`` without waiting; return the pid."""
        ...  # pragma: no cover

    def spawn(self, argv: Sequence[str], *, cwd: Path | None = None) -> int:
        """Start *argv* directly (no shell) without waiting; return the pid."""
        ...  # pragma: no cover
