"""Pure argument formatting for external utilities.

Every function in this module is a **pure** transformation — no process
spawning, no filesystem access, fully deterministic.  Output is always
an argument list; :func:`render_shell_command` is the single place that
turns one into a shell string, and it quotes every element.

Formatting policy
-----------------
* Opacity: one decimal place, values outside ``[0, 1]`` are rejected
  (never clamped).
* Volume: ``Set(50) → "50"``, ``Raise(5) → "+5"``, ``Lower(5) → "-5"``.
* Paths: ``~`` expanded, then made absolute.
"""

from __future__ import annotations

import math
import os
import shlex
from collections.abc import Sequence
from pathlib import Path

from deskwrap.core.models import VolumeMode
from deskwrap.exceptions import InvalidParameterError

MAX_VOLUME: int = 100


# ---------------------------------------------------------------------------
# Numeric parameters
# ---------------------------------------------------------------------------

def format_opacity(value: float) -> str:
    """Render *value* as a single opacity argument, e.g. ``"0.8"``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameterError(
            f"Opacity must be a number, got {value!r}.",
            hint="Use a value between 0 and 1, e.g. 0.8",
        )
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise InvalidParameterError(
            f"Opacity {value} is outside the range 0 to 1.",
            hint="0 is fully transparent, 1 is fully opaque.",
        )
    return f"{value:.1f}"


def parse_volume_mode(value: VolumeMode | str) -> VolumeMode:
    """Return the :class:`VolumeMode` named by *value*.

    Unrecognised modes fail fast instead of falling back to ``Set``.
    """
    if isinstance(value, VolumeMode):
        return value
    if isinstance(value, str):
        try:
            return VolumeMode(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(mode.value for mode in VolumeMode)
    raise InvalidParameterError(
        f"Unknown volume mode {value!r}.",
        hint=f"Choose one of: {choices}",
    )


def format_volume(value: int, mode: VolumeMode | str = VolumeMode.SET) -> str:
    """Render a mixer volume argument carrying the prefix of *mode*."""
    resolved = parse_volume_mode(mode)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"Volume must be an integer, got {value!r}.")
    if value < 0:
        raise InvalidParameterError(
            f"Volume {value} is negative.",
            hint="Use the raise or lower mode to change the volume relatively.",
        )
    if resolved is VolumeMode.SET and value > MAX_VOLUME:
        raise InvalidParameterError(
            f"Volume {value} is above {MAX_VOLUME}.",
            hint=f"Absolute volume ranges from 0 to {MAX_VOLUME}.",
        )
    return f"{resolved.prefix}{value}"


# ---------------------------------------------------------------------------
# String parameters
# ---------------------------------------------------------------------------

def expand_path(path: str | os.PathLike[str]) -> Path:
    """Expand ``~`` and return an absolute :class:`Path`."""
    text = os.fspath(path)
    if not text.strip():
        raise InvalidParameterError("Path must not be empty.")
    return Path(os.path.abspath(os.path.expanduser(text)))


def split_arguments(text: str | None) -> list[str]:
    """Split an extra-argument string with POSIX shell rules."""
    if not text:
        return []
    try:
        return shlex.split(text)
    except ValueError as exc:
        raise InvalidParameterError(
            f"Cannot parse arguments {text!r}: {exc}",
            hint="Check for unbalanced quotes.",
        ) from exc


# ---------------------------------------------------------------------------
# Shell rendering
# ---------------------------------------------------------------------------

def render_shell_command(
    template: str,
    executable: str | os.PathLike[str],
    arguments: Sequence[str],
) -> str:
    """Render a shell command line from *template*.

    *template* receives two fields, ``{executable}`` and ``{arguments}``,
    both already quoted for ``/bin/sh``.
    """
    try:
        command = template.format(
            executable=shlex.quote(os.fspath(executable)),
            arguments=shlex.join(arguments),
        )
    except (KeyError, IndexError, ValueError) as exc:
        raise InvalidParameterError(
            f"Invalid command template {template!r}: {exc}",
        ) from exc
    return command.strip()
