"""Desktop actions — one entry point per wrapped utility.

Each method turns caller parameters plus configuration into an
:class:`~deskwrap.core.models.InvocationRequest` and hands it to the
:class:`~deskwrap.core.invocation_service.InvocationService`.  Parameter
errors raised while building the request are reported as results, so
no action ever raises a :class:`~deskwrap.exceptions.DeskWrapError`.

Filesystem access is limited to what actions need before a spawn:
checking that a conversion source exists and creating the capture
directory.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from deskwrap.core.command_formatter import (
    expand_path,
    format_opacity,
    format_volume,
    parse_volume_mode,
    split_arguments,
)
from deskwrap.core.config import DeskWrapConfig
from deskwrap.core.invocation_service import InvocationService
from deskwrap.core.models import (
    ActionName,
    InvocationRequest,
    InvocationResult,
    VolumeMode,
)
from deskwrap.exceptions import DeskWrapError, InvalidParameterError, SourceFileMissingError

logger = logging.getLogger(__name__)

_Built = tuple[InvocationRequest, Path | None]


class DesktopActions:
    """Programmatic surface of every deskwrap action.

    Parameters
    ----------
    service:
        The invocation layer; its configuration drives every action.
    """

    def __init__(self, service: InvocationService) -> None:
        self._service: InvocationService = service

    @property
    def config(self) -> DeskWrapConfig:
        return self._service.config

    def configure(self, **changes: Any) -> DeskWrapConfig:
        """Replace configuration fields for subsequent invocations."""
        self._service.config = replace(self._service.config, **changes)
        return self._service.config

    # ------------------------------------------------------------------
    # Transparency
    # ------------------------------------------------------------------

    def set_transparency(
        self,
        opacity: float | None = None,
        extra_arguments: str | None = None,
    ) -> InvocationResult:
        """Set window opacity; without *extra_arguments* the setter lets
        the user click the target window."""
        value = self.config.default_opacity if opacity is None else opacity
        return self._transparency(ActionName.SET_TRANSPARENCY, value, extra_arguments)

    def set_window_transparency(self, opacity: float | None = None) -> InvocationResult:
        """Set the opacity of the focused window."""
        value = self.config.window_opacity if opacity is None else opacity
        return self._transparency(
            ActionName.SET_WINDOW_TRANSPARENCY, value, self.config.window_transparency_arguments,
        )

    def _transparency(
        self, name: ActionName, opacity: float, extra_arguments: str | None,
    ) -> InvocationResult:
        def build() -> _Built:
            action = self.config.action(name)
            args = [
                *split_arguments(action.arguments),
                *split_arguments(extra_arguments),
                format_opacity(opacity),
            ]
            return self._request(action.executable, args, name), None

        return self._run(name, build)

    # ------------------------------------------------------------------
    # Screen
    # ------------------------------------------------------------------

    def lock_screen(self) -> InvocationResult:
        def build() -> _Built:
            action = self.config.action(ActionName.LOCK_SCREEN)
            args = split_arguments(action.arguments)
            return self._request(action.executable, args, ActionName.LOCK_SCREEN), None

        return self._run(ActionName.LOCK_SCREEN, build)

    def capture_screen(self, directory: str | os.PathLike[str] | None = None) -> InvocationResult:
        """Capture the screen into *directory* (default: configured one).

        The capture utility writes into its working directory, so the
        directory is created first and passed as the spawn cwd.
        """

        def build() -> _Built:
            target = expand_path(directory if directory is not None else self.config.capture_directory)
            action = self.config.action(ActionName.CAPTURE_SCREEN)
            args = split_arguments(action.arguments)
            request = self._request(
                action.executable, args, ActionName.CAPTURE_SCREEN, working_directory=target,
            )
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise InvalidParameterError(
                    f"Cannot create capture directory {target}: {exc.strerror or exc}",
                ) from exc
            return request, target

        return self._run(ActionName.CAPTURE_SCREEN, build)

    # ------------------------------------------------------------------
    # Volume
    # ------------------------------------------------------------------

    def set_volume(self, value: int, mode: VolumeMode | str = VolumeMode.SET) -> InvocationResult:
        return self._volume(ActionName.SET_VOLUME, value, mode)

    def raise_volume(self, factor: int | None = None) -> InvocationResult:
        step = self.config.volume_step if factor is None else factor
        return self._volume(ActionName.RAISE_VOLUME, step, VolumeMode.RAISE)

    def lower_volume(self, factor: int | None = None) -> InvocationResult:
        step = self.config.volume_step if factor is None else factor
        return self._volume(ActionName.LOWER_VOLUME, step, VolumeMode.LOWER)

    def mute_audio(self) -> InvocationResult:
        return self._volume(ActionName.MUTE_AUDIO, 0, VolumeMode.SET)

    def _volume(self, name: ActionName, value: int, mode: VolumeMode | str) -> InvocationResult:
        def build() -> _Built:
            resolved = parse_volume_mode(mode)
            action = self.config.action(name)
            args = [*split_arguments(action.arguments), format_volume(value, resolved)]
            return self._request(action.executable, args, name), None

        return self._run(name, build)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def export_pdf_to_text(
        self,
        source: str | os.PathLike[str],
        destination: str | os.PathLike[str] | None = None,
    ) -> InvocationResult:
        """Convert *source* to plain text next to it, or at *destination*."""

        def build() -> _Built:
            src = expand_path(source)
            if not src.is_file():
                raise SourceFileMissingError(
                    f"Source file {src} does not exist.",
                    hint="Check the path of the PDF to convert.",
                )
            dest = expand_path(destination) if destination is not None else src.with_suffix(".txt")
            if dest.resolve() == src.resolve():
                raise InvalidParameterError(
                    f"Output file {dest} is the source file itself.",
                    hint="Pass a different destination for the text output.",
                )
            action = self.config.action(ActionName.EXPORT_PDF_TO_TEXT)
            args = [*split_arguments(action.arguments), str(src), str(dest)]
            return self._request(action.executable, args, ActionName.EXPORT_PDF_TO_TEXT), dest

        return self._run(ActionName.EXPORT_PDF_TO_TEXT, build)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _request(
        self,
        executable: str,
        arguments: list[str],
        name: ActionName,
        *,
        working_directory: Path | None = None,
    ) -> InvocationRequest:
        return InvocationRequest(
            executable=executable,
            arguments=tuple(arguments),
            mode=self.config.action(name).mode,
            working_directory=working_directory,
        )

    def _run(self, name: ActionName, build: Callable[[], _Built]) -> InvocationResult:
        logger.debug("Action %s requested", name.value)
        try:
            request, output_location = build()
        except DeskWrapError as exc:
            logger.debug("Action %s rejected: %s", name.value, exc)
            return InvocationResult.from_error(exc)
        return self._service.invoke(request, output_location=output_location)
