"""CLI console helpers with optional Rich support.

Module-level imports of optional UI dependencies are avoided so that
bootstrap paths (``--help``, ``--version``) and plain status output keep
working when Rich is not installed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from deskwrap.core.models import InvocationResult, OutcomeKind
from deskwrap.exceptions import EnvironmentError

_MARKUP = re.compile(r"(?<!\\)\[/?[a-z ]+\]")

_STYLES: dict[OutcomeKind, str] = {
    OutcomeKind.SUCCESS: "bold green",
    OutcomeKind.LAUNCHED: "bold cyan",
    OutcomeKind.EXECUTABLE_NOT_FOUND: "bold red",
    OutcomeKind.INVALID_PARAMETER: "bold red",
    OutcomeKind.SOURCE_FILE_MISSING: "bold red",
    OutcomeKind.EXECUTION_FAILED: "bold red",
}

_LABELS: dict[OutcomeKind, str] = {
    OutcomeKind.SUCCESS: "Done",
    OutcomeKind.LAUNCHED: "Launched",
    OutcomeKind.EXECUTABLE_NOT_FOUND: "Not found",
    OutcomeKind.INVALID_PARAMETER: "Invalid",
    OutcomeKind.SOURCE_FILE_MISSING: "Missing",
    OutcomeKind.EXECUTION_FAILED: "Failed",
}


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, soft_wrap=True)


def escape(text: object) -> str:
    """Escape user text (paths, stderr) before it goes into a markup string.

    Without Rich every ``[`` is backslash-escaped; :func:`strip_markup`
    leaves escaped brackets alone and unescapes them.
    """
    text = str(text)
    try:
        _load_rich_console_class()
        from rich.markup import escape as rich_escape
    except (EnvironmentError, ModuleNotFoundError):
        return text.replace("[", "\\[")
    return rich_escape(text)


def strip_markup(text: str) -> str:
    """Remove unescaped ``[style]`` tags for plain output."""
    return _MARKUP.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain stderr fallback."""

    def print(self, *objects: object) -> None:
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            plain = [strip_markup(o) if isinstance(o, str) else o for o in objects]
            print(*plain, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def print_result(result: InvocationResult) -> None:
    """Render one invocation result as a status line (plus hint)."""
    style = _STYLES[result.kind]
    console.print(f"[{style}]{_LABELS[result.kind]}:[/{style}] {escape(result.message)}")
    if result.output_location is not None:
        console.print(f"[dim]Output:[/dim] {escape(result.output_location)}")
    if result.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(result.hint)}")
