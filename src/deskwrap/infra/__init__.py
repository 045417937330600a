"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system: executable
lookup, process spawning and configuration files.  Every raw exception
must be caught here and re-raised as a
:class:`~deskwrap.exceptions.DeskWrapError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from deskwrap.infra.config_loader import default_config_path, load_config
from deskwrap.infra.executable_resolver import (
    ExecutableStatus,
    PathExecutableResolver,
    detect_executable,
    require_executable,
)
from deskwrap.infra.process_executor import SubprocessExecutor

__all__: list[str] = [
    "ExecutableStatus",
    "PathExecutableResolver",
    "SubprocessExecutor",
    "default_config_path",
    "detect_executable",
    "load_config",
    "require_executable",
]
