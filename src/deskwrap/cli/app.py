"""CLI application entry point and command routing for deskwrap.

This module is the **sole error boundary** for the entire application.
It catches :class:`~deskwrap.exceptions.DeskWrapError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — actions build and run invocations in
  the core layer; this module collects arguments and reports results.
* ``print()`` is forbidden outside the CLI layer; the console proxy is
  used exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from deskwrap.cli import exit_codes
from deskwrap.cli.console import console, escape, print_result
from deskwrap.core.actions import DesktopActions
from deskwrap.core.config import DeskWrapConfig
from deskwrap.core.models import ActionName, InvocationResult, OutcomeKind, VolumeMode
from deskwrap.exceptions import DeskWrapError
from deskwrap.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with one sub-command per action."""
    parser = argparse.ArgumentParser(
        prog="deskwrap",
        description="Wrapper commands for external desktop utilities.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        metavar="PATH",
        help="Configuration file (default: ~/.config/deskwrap/config.yaml).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser(ActionName.SET_TRANSPARENCY.value, help="Set the opacity of a window.")
    p.add_argument("opacity", nargs="?", type=float, help="Opacity between 0 and 1.")
    p.add_argument(
        "-e",
        "--extra",
        default=None,
        metavar="ARGS",
        help="Extra arguments for the transparency setter.",
    )

    p = sub.add_parser(
        ActionName.SET_WINDOW_TRANSPARENCY.value,
        help="Set the opacity of the focused window.",
    )
    p.add_argument("opacity", nargs="?", type=float, help="Opacity between 0 and 1.")

    p = sub.add_parser(ActionName.CAPTURE_SCREEN.value, help="Capture the screen to an image.")
    p.add_argument("directory", nargs="?", default=None, help="Destination directory.")

    sub.add_parser(ActionName.LOCK_SCREEN.value, help="Lock the screen.")

    p = sub.add_parser(ActionName.SET_VOLUME.value, help="Set or change the volume.")
    p.add_argument("value", nargs="?", type=int, help="Volume value or step.")
    p.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in VolumeMode],
        default=VolumeMode.SET.value,
        help="Set absolutely, or raise/lower by VALUE.",
    )

    for name, verb in (
        (ActionName.RAISE_VOLUME, "Raise"),
        (ActionName.LOWER_VOLUME, "Lower"),
    ):
        p = sub.add_parser(name.value, help=f"{verb} the volume by a step.")
        p.add_argument("factor", nargs="?", type=int, help="Step (default from config).")

    sub.add_parser(ActionName.MUTE_AUDIO.value, help="Set the volume to 0.")

    p = sub.add_parser(ActionName.EXPORT_PDF_TO_TEXT.value, help="Convert a PDF to plain text.")
    p.add_argument("source", nargs="?", default=None, help="PDF file to convert.")
    p.add_argument("destination", nargs="?", default=None, help="Text file to write.")

    sub.add_parser("doctor", help="Check that the wrapped utilities are installed.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if verbose:
        logging.getLogger("deskwrap").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def build_actions(config: DeskWrapConfig) -> DesktopActions:
    """Wire the infrastructure adapters into a :class:`DesktopActions`."""
    from deskwrap.core.invocation_service import InvocationService
    from deskwrap.infra.executable_resolver import PathExecutableResolver
    from deskwrap.infra.process_executor import SubprocessExecutor

    service = InvocationService(PathExecutableResolver(), SubprocessExecutor(), config)
    return DesktopActions(service)


def _exit_code(result: InvocationResult) -> int:
    if result.ok:
        return exit_codes.SUCCESS
    if result.kind is OutcomeKind.EXECUTABLE_NOT_FOUND:
        return exit_codes.EXECUTABLE_NOT_FOUND
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _dispatch(args: argparse.Namespace, actions: DesktopActions) -> InvocationResult:
    """Collect missing values and run the selected action."""
    from deskwrap.cli import prompts

    config = actions.config
    command = ActionName(args.command)

    handlers: dict[ActionName, Callable[[], InvocationResult]] = {
        ActionName.SET_TRANSPARENCY: lambda: actions.set_transparency(
            args.opacity if args.opacity is not None
            else prompts.prompt_opacity(config.default_opacity),
            args.extra,
        ),
        ActionName.SET_WINDOW_TRANSPARENCY: lambda: actions.set_window_transparency(
            args.opacity,
        ),
        ActionName.CAPTURE_SCREEN: lambda: actions.capture_screen(args.directory),
        ActionName.LOCK_SCREEN: actions.lock_screen,
        ActionName.SET_VOLUME: lambda: actions.set_volume(
            args.value if args.value is not None
            else prompts.prompt_volume(VolumeMode(args.mode)),
            args.mode,
        ),
        ActionName.RAISE_VOLUME: lambda: actions.raise_volume(args.factor),
        ActionName.LOWER_VOLUME: lambda: actions.lower_volume(args.factor),
        ActionName.MUTE_AUDIO: actions.mute_audio,
        ActionName.EXPORT_PDF_TO_TEXT: lambda: actions.export_pdf_to_text(
            args.source if args.source is not None else prompts.prompt_pdf_path(),
            args.destination,
        ),
    }
    return handlers[command]()


def _handle_doctor(config_path: str | None) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from deskwrap.cli.doctor import run_doctor

    return run_doctor(config_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the deskwrap CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor(args.config)

    from deskwrap.infra.config_loader import load_config

    config, source = load_config(args.config)
    logger.debug("Configuration from %s", source or "defaults")

    result = _dispatch(args, build_actions(config))
    print_result(result)
    return _exit_code(result)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DeskWrapError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
