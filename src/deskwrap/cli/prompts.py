"""Interactive prompts for required values missing from the command line.

The CLI is the collaborator that collects arguments for the invocation
layer.  When a required value is not given on the command line, it is
asked for here via questionary and validated with the same formatter
rules the layer applies, so invalid input is re-prompted instead of
producing an ``invalid-parameter`` result.
"""

from __future__ import annotations

from typing import Any

from deskwrap.core.command_formatter import format_opacity, format_volume
from deskwrap.core.models import VolumeMode
from deskwrap.exceptions import EnvironmentError, InvalidParameterError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Validators (pure — return True or an error message for questionary)
# ---------------------------------------------------------------------------

def _validate_opacity(text: str) -> bool | str:
    try:
        format_opacity(float(text))
    except ValueError:
        return "Enter a number, e.g. 0.8"
    except InvalidParameterError as exc:
        return str(exc)
    return True


def _validate_volume(mode: VolumeMode) -> Any:
    def validate(text: str) -> bool | str:
        try:
            format_volume(int(text), mode)
        except ValueError:
            return "Enter a whole number"
        except InvalidParameterError as exc:
            return str(exc)
        return True

    return validate


def _answered(value: str | None, what: str) -> str:
    """questionary returns ``None`` on Ctrl+C / Esc."""
    if value is None:
        raise KeyboardInterrupt(f"No {what} entered.")
    return value


# ---------------------------------------------------------------------------
# Public prompt functions
# ---------------------------------------------------------------------------

def prompt_opacity(default: float) -> float:
    """Ask for an opacity between 0 and 1."""
    questionary = _import_questionary()
    answer = questionary.text(
        "Opacity (0 = transparent, 1 = opaque):",
        default=f"{default:.1f}",
        validate=_validate_opacity,
    ).ask()
    return float(_answered(answer, "opacity"))


def prompt_volume(mode: VolumeMode) -> int:
    """Ask for a volume value appropriate for *mode*."""
    questionary = _import_questionary()
    label = "Volume (0-100):" if mode is VolumeMode.SET else f"Volume step to {mode.value}:"
    answer = questionary.text(label, validate=_validate_volume(mode)).ask()
    return int(_answered(answer, "volume"))


def prompt_pdf_path() -> str:
    """Ask for the PDF to convert, with path completion."""
    questionary = _import_questionary()
    answer = questionary.path(
        "PDF file to convert:",
        validate=lambda text: bool(text.strip()) or "Enter a path",
    ).ask()
    return _answered(answer, "source file").strip()
