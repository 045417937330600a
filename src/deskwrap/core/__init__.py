"""Core / service layer — models, formatting and invocation logic.

Rules
-----
* No ``print()`` calls.
* No process spawning and no ``subprocess`` import; processes are
  started through the :mod:`deskwrap.core.protocols` interfaces.
* No imports from ``cli`` or ``infra``.
* Filesystem access only where an action needs it before a spawn.
"""

from deskwrap.core.actions import DesktopActions
from deskwrap.core.config import DeskWrapConfig, ToolConfig
from deskwrap.core.invocation_service import InvocationService
from deskwrap.core.models import (
    Action,
    ActionName,
    ExecutionMode,
    InvocationRequest,
    InvocationResult,
    OutcomeKind,
    RunOutcome,
    VolumeMode,
)
from deskwrap.core.protocols import ExecutableResolver, ProcessExecutor

__all__: list[str] = [
    "Action",
    "ActionName",
    "DeskWrapConfig",
    "DesktopActions",
    "ExecutableResolver",
    "ExecutionMode",
    "InvocationRequest",
    "InvocationResult",
    "InvocationService",
    "OutcomeKind",
    "ProcessExecutor",
    "RunOutcome",
    "ToolConfig",
    "VolumeMode",
]
