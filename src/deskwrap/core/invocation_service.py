"""Core invocation service — resolve, execute, report.

This is the single dispatch point between actions and the operating
system.  It depends on an :class:`~deskwrap.core.protocols.ExecutableResolver`
and a :class:`~deskwrap.core.protocols.ProcessExecutor` injected at
construction time, keeping the core free of any ``subprocess`` import.

Lifecycle of one request::

    Requested → Resolving → Resolved → Executing → Succeeded | Failed
                          ↘ Unresolved

Guarantees
----------
* Nothing is spawned unless resolution succeeded.
* Every outcome becomes exactly one :class:`InvocationResult`; no
  :class:`~deskwrap.exceptions.DeskWrapError` escapes :meth:`invoke`.
* Non-blocking modes report ``launched``, never ``success``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from deskwrap.core.command_formatter import render_shell_command
from deskwrap.core.config import DeskWrapConfig
from deskwrap.core.models import (
    ExecutionMode,
    InvocationRequest,
    InvocationResult,
    OutcomeKind,
)
from deskwrap.core.protocols import ExecutableResolver, ProcessExecutor
from deskwrap.exceptions import DeskWrapError, ExecutionFailedError, InvalidParameterError

logger = logging.getLogger(__name__)

_STDERR_TAIL: int = 200


class InvocationService:
    """Executes :class:`InvocationRequest` objects and reports outcomes.

    Parameters
    ----------
    resolver:
        Any object satisfying the :class:`ExecutableResolver` protocol.
    executor:
        Any object satisfying the :class:`ProcessExecutor` protocol.
    config:
        Initial configuration; replace via :attr:`config` between
        invocations.
    """

    def __init__(
        self,
        resolver: ExecutableResolver,
        executor: ProcessExecutor,
        config: DeskWrapConfig | None = None,
    ) -> None:
        self._resolver: ExecutableResolver = resolver
        self._executor: ProcessExecutor = executor
        self.config: DeskWrapConfig = config if config is not None else DeskWrapConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def invoke(
        self,
        request: InvocationRequest,
        *,
        output_location: Path | None = None,
    ) -> InvocationResult:
        """Resolve and execute *request*.

        *output_location* is attached to a successful result so callers
        can show where the utility writes its output.
        """
        logger.debug("Resolving %s", request.executable)
        try:
            path = self._resolver.resolve(request.executable, self.config.search_path)
        except DeskWrapError as exc:
            logger.debug("Unresolved %s", request.executable)
            return InvocationResult.from_error(exc, request=request)

        logger.debug("Resolved %s -> %s", request.executable, path)
        try:
            result = self._execute(path, request)
        except DeskWrapError as exc:
            logger.debug("Failed %s: %s", request.executable, exc)
            return InvocationResult.from_error(exc, request=request)

        logger.debug("Succeeded %s (%s)", request.executable, result.kind.value)
        if output_location is not None:
            return InvocationResult(
                kind=result.kind,
                message=result.message,
                output_location=output_location,
                request=request,
            )
        return result

    # ------------------------------------------------------------------
    # Execution modes
    # ------------------------------------------------------------------

    def _execute(self, path: Path, request: InvocationRequest) -> InvocationResult:
        name = request.executable
        argv = [str(path), *request.arguments]
        cwd = request.working_directory

        if request.mode is ExecutionMode.SYNCHRONOUS:
            logger.info("Running %s", argv)
            outcome = self._executor.run(argv, cwd=cwd)
            if outcome.returncode != 0:
                detail = outcome.stderr.strip()[-_STDERR_TAIL:]
                message = f"{name} exited with status {outcome.returncode}."
                if detail:
                    message = f"{message} {detail}"
                raise ExecutionFailedError(message)
            return InvocationResult(
                kind=OutcomeKind.SUCCESS,
                message=f"{name} completed.",
                request=request,
            )

        if request.mode is ExecutionMode.ASYNCHRONOUS:
            command = render_shell_command(
                self.config.command_template, path, request.arguments,
            )
            logger.info("Launching via shell: %s", command)
            pid = self._executor.spawn_shell(command, cwd=cwd)
            return self._launched(name, pid, request)

        if request.mode is ExecutionMode.FIRE_AND_FORGET:
            logger.info("Launching %s in %s", argv, cwd or ".")
            pid = self._executor.spawn(argv, cwd=cwd)
            return self._launched(name, pid, request)

        raise InvalidParameterError(f"Unknown execution mode {request.mode!r}.")

    @staticmethod
    def _launched(name: str, pid: int, request: InvocationRequest) -> InvocationResult:
        return InvocationResult(
            kind=OutcomeKind.LAUNCHED,
            message=f"{name} launched (pid {pid}); completion is not observed.",
            request=request,
        )
