"""Infrastructure: executable lookup and platform install guidance.

Locates the external utilities on the executable search path and
suggests how to install the known ones when they are missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* Never substitutes an alternate binary for the requested name.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from deskwrap.exceptions import ExecutableNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutableStatus:
    """Result of a lookup probe.

    Attributes
    ----------
    name : str
        The program name that was searched for.
    found : bool
        Whether the program was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the program on the
        current platform.  Empty when it is already present or unknown.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_executable(name: str, search_path: Sequence[str] | None = None) -> ExecutableStatus:
    """Probe for *name* on *search_path* (default ``$PATH``).

    Returns an :class:`ExecutableStatus` whether or not the program is
    present — the caller decides whether to abort or merely warn.
    """
    path_env = os.pathsep.join(search_path) if search_path is not None else None
    result = shutil.which(name, path=path_env)

    if result is not None:
        return ExecutableStatus(
            name=name,
            found=True,
            path=Path(os.path.abspath(result)),
            install_commands=(),
        )

    return ExecutableStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )


def require_executable(name: str, search_path: Sequence[str] | None = None) -> Path:
    """Locate *name* or raise :class:`ExecutableNotFoundError`."""
    status = detect_executable(name, search_path)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {_program_name(name)} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ExecutableNotFoundError(
            name,
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


class PathExecutableResolver:
    """Concrete :class:`~deskwrap.core.protocols.ExecutableResolver`.

    Satisfies the protocol structurally — no explicit inheritance.
    """

    def resolve(self, name: str, search_path: Sequence[str] | None = None) -> Path:
        return require_executable(name, search_path)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

# program -> (apt, dnf, pacman, brew) package names; None when unavailable.
_PACKAGES: dict[str, tuple[str | None, str | None, str | None, str | None]] = {
    "transset-df": ("transset-df", None, None, None),
    "transset": ("x11-apps", "xorg-x11-apps", "xorg-transset", None),
    "slock": ("suckless-tools", "slock", "slock", None),
    "xtrlock": ("xtrlock", None, None, None),
    "scrot": ("scrot", "scrot", "scrot", None),
    "aumix": ("aumix", "aumix", "aumix", None),
    "amixer": ("alsa-utils", "alsa-utils", "alsa-utils", None),
    "pdftotext": ("poppler-utils", "poppler-utils", "poppler", "poppler"),
}


def _program_name(name: str) -> str:
    return os.path.basename(name) or name


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    packages = _PACKAGES.get(_program_name(name))
    if packages is None:
        return ()
    apt, dnf, pacman, brew = packages
    system = platform.system().lower()
    if system == "linux":
        commands = []
        if apt:
            commands.append(f"sudo apt install {apt}")
        if dnf:
            commands.append(f"sudo dnf install {dnf}")
        if pacman:
            commands.append(f"sudo pacman -S {pacman}")
        return tuple(commands)
    if system == "darwin" and brew:
        return (f"brew install {brew}",)
    return ()
