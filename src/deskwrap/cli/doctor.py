"""``deskwrap doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the wrapped utilities are installed and which configuration is
in effect.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  A missing utility is a warning
(the other actions still work); only an unsupported Python or an
unreadable configuration fail the check.
"""

from __future__ import annotations

import platform
import sys

from deskwrap.cli import exit_codes
from deskwrap.cli.console import console, escape
from deskwrap.core.config import DeskWrapConfig
from deskwrap.exceptions import ConfigError
from deskwrap.infra.config_loader import load_config
from deskwrap.infra.executable_resolver import ExecutableStatus, detect_executable
from deskwrap.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _tool_check(label: str, status_obj: ExecutableStatus) -> Check:
    """Return (label, value, status) for one configured utility."""
    if status_obj.found:
        path_str = str(status_obj.path) if status_obj.path else "found"
        return label, path_str, "[green]OK[/green]"
    return label, f"{status_obj.name} not found", "[yellow]WARN[/yellow]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    if system_raw == "Windows":
        return "OS", value, "[yellow]WARN (unix utilities)[/yellow]"
    return "OS", value, "[green]OK[/green]"


def _deskwrap_version_check() -> Check:
    """Return (label, value, status) for the deskwrap version row."""
    return "deskwrap", __version__, "[green]OK[/green]"


def _config_check(config_path: str | None) -> tuple[Check, DeskWrapConfig]:
    """Return the config row and the configuration to probe tools with."""
    try:
        config, source = load_config(config_path)
    except ConfigError as exc:
        return ("config", str(exc), "[red]FAIL[/red]"), DeskWrapConfig()
    value = str(source) if source is not None else "defaults"
    return ("config", value, "[green]OK[/green]"), config


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\ndeskwrap doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_doctor_table(table_class: type, checks: list[Check]) -> None:
    table = table_class(
        title="deskwrap doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=14)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, escape(value), status)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: str | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    config_row, config = _config_check(config_path)
    tool_statuses = {
        name: detect_executable(tool.executable, config.search_path)
        for name, tool in config.tools().items()
    }

    checks: list[Check] = [
        _deskwrap_version_check(),
        _python_version_check(),
        config_row,
        *(_tool_check(name, status) for name, status in tool_statuses.items()),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        _print_rich_doctor_table(Table, checks)

    # console falls back to plain stderr on its own.
    for status_obj in tool_statuses.values():
        if status_obj.found or not status_obj.install_commands:
            continue
        console.print(
            f"[yellow]{escape(status_obj.name)} is not installed.[/yellow] Install with one of:",
        )
        for cmd in status_obj.install_commands:
            console.print(f"  [bold]{escape(cmd)}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
