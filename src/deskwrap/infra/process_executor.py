"""``subprocess`` backed implementation of
:class:`~deskwrap.core.protocols.ProcessExecutor`.

This module is the **only** place in the codebase that starts child
processes.  ``OSError`` from :mod:`subprocess` is caught here and
re-raised as :class:`~deskwrap.exceptions.ExecutionFailedError` —
nothing raw escapes the infrastructure boundary.

Non-blocking spawns start a new session with all standard streams
detached, so the child outlives the caller and never writes into its
terminal.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from deskwrap.core.models import RunOutcome
from deskwrap.exceptions import ExecutionFailedError

logger = logging.getLogger(__name__)


class SubprocessExecutor:
    """Concrete :class:`ProcessExecutor` built on :mod:`subprocess`.

    This class satisfies the protocol structurally — no explicit
    inheritance required.

    Detached children are never waited on.  Their ``Popen`` handles are
    kept and polled on every later spawn, so exited children are reaped
    instead of lingering as zombies in a long-lived host.
    """

    def __init__(self) -> None:
        self._children: list[subprocess.Popen[bytes]] = []

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> RunOutcome:
        """Run *argv* to completion, capturing stderr."""
        try:
            completed = subprocess.run(
                list(argv),
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExecutionFailedError(
                f"Could not run {argv[0]}: {exc.strerror or exc}",
            ) from exc
        logger.debug("%s exited with %d", argv[0], completed.returncode)
        return RunOutcome(returncode=completed.returncode, stderr=completed.stderr or "")

    def spawn_shell(self, command: str, *, cwd: Path | None = None) -> int:
        """Start *command* via ``/bin/sh -c`` and return without waiting."""
        return self._detach(command, cwd=cwd, shell=True)

    def spawn(self, argv: Sequence[str], *, cwd: Path | None = None) -> int:
        """Start *argv* directly and return without waiting.

        *cwd* applies to the child only; the caller's working directory
        is never changed, including when the spawn fails.
        """
        return self._detach(list(argv), cwd=cwd, shell=False)

    @property
    def live_children(self) -> int:
        """Number of detached children not yet seen to exit."""
        self._reap()
        return len(self._children)

    def _reap(self) -> None:
        self._children = [child for child in self._children if child.poll() is None]

    def _detach(self, args: str | list[str], *, cwd: Path | None, shell: bool) -> int:
        self._reap()
        label = args if isinstance(args, str) else args[0]
        try:
            process = subprocess.Popen(
                args,
                cwd=cwd,
                shell=shell,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise ExecutionFailedError(
                f"Could not launch {label}: {exc.strerror or exc}",
            ) from exc
        self._children.append(process)
        logger.debug("Spawned pid %d for %s", process.pid, label)
        return process.pid
