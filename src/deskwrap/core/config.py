"""Configuration value objects for the invocation layer.

:class:`DeskWrapConfig` replaces process-wide globals: it is built once
(by :mod:`deskwrap.infra.config_loader` or directly in code), held by an
:class:`~deskwrap.core.invocation_service.InvocationService`, and
replaced wholesale to reconfigure between invocations.

Validation lives here so that configuration built in code and
configuration read from YAML obey the same rules.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from deskwrap.core.models import Action, ActionName, ExecutionMode
from deskwrap.exceptions import ConfigError

DEFAULT_COMMAND_TEMPLATE: str = "{executable} {arguments}"


@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Executable and default argument string for one utility."""

    executable: str
    arguments: str = ""


@dataclass(frozen=True, slots=True)
class DeskWrapConfig:
    """Every tunable of the invocation layer."""

    transparency: ToolConfig = field(default_factory=lambda: ToolConfig("transset-df"))
    locker: ToolConfig = field(default_factory=lambda: ToolConfig("slock"))
    capture: ToolConfig = field(default_factory=lambda: ToolConfig("scrot"))
    mixer: ToolConfig = field(default_factory=lambda: ToolConfig("aumix", "-v"))
    pdf_to_text: ToolConfig = field(default_factory=lambda: ToolConfig("pdftotext"))

    default_opacity: float = 0.8
    window_opacity: float = 0.9
    window_transparency_arguments: str = "-a"
    volume_step: int = 5
    capture_directory: str = "~/Pictures/screenshots"
    command_template: str = DEFAULT_COMMAND_TEMPLATE
    search_path: tuple[str, ...] | None = None
    """Directories searched for executables; ``None`` means ``$PATH``."""

    def __post_init__(self) -> None:
        _validate(self)

    # ------------------------------------------------------------------
    # Action table
    # ------------------------------------------------------------------

    def action(self, name: ActionName) -> Action:
        """Return the :class:`Action` descriptor for *name*."""
        tool_field, mode = _ACTION_TOOLS[name]
        tool: ToolConfig = getattr(self, tool_field)
        return Action(
            name=name,
            executable=tool.executable,
            arguments=tool.arguments,
            mode=mode,
        )

    def tools(self) -> dict[str, ToolConfig]:
        """Return the configured utilities keyed by their config name."""
        return {name: getattr(self, name) for name in TOOL_FIELDS}

    # ------------------------------------------------------------------
    # Mapping conversion
    # ------------------------------------------------------------------

    def to_mapping(self) -> dict[str, Any]:
        """Return a plain nested dict, the shape of the YAML file."""
        data = asdict(self)
        tools = {name: data.pop(name) for name in TOOL_FIELDS}
        data["tools"] = tools
        if data["search_path"] is not None:
            data["search_path"] = list(data["search_path"])
        return data

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> DeskWrapConfig:
        """Build a config from a nested mapping such as parsed YAML.

        Missing keys keep their defaults.  Unknown keys are rejected so
        that typos surface instead of being silently ignored.
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping.")

        known = {f.name for f in fields(cls)} - set(TOOL_FIELDS) | {"tools"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration key(s): {', '.join(unknown)}",
                hint=f"Valid keys: {', '.join(sorted(known))}",
            )

        kwargs: dict[str, Any] = {k: v for k, v in data.items() if k != "tools"}

        tools = data.get("tools") or {}
        if not isinstance(tools, dict):
            raise ConfigError("'tools' must be a mapping.")
        for name, spec in tools.items():
            if name not in TOOL_FIELDS:
                raise ConfigError(
                    f"Unknown tool '{name}'.",
                    hint=f"Valid tools: {', '.join(TOOL_FIELDS)}",
                )
            kwargs[name] = _tool_from_mapping(name, spec, getattr(_DEFAULTS, name))

        search_path = kwargs.get("search_path")
        if search_path is not None:
            if isinstance(search_path, str) or not isinstance(search_path, (list, tuple)):
                raise ConfigError("'search_path' must be a list of directories.")
            kwargs["search_path"] = tuple(str(entry) for entry in search_path)

        return cls(**kwargs)


TOOL_FIELDS: tuple[str, ...] = (
    "transparency",
    "locker",
    "capture",
    "mixer",
    "pdf_to_text",
)

_ACTION_TOOLS: dict[ActionName, tuple[str, ExecutionMode]] = {
    ActionName.SET_TRANSPARENCY: ("transparency", ExecutionMode.ASYNCHRONOUS),
    ActionName.SET_WINDOW_TRANSPARENCY: ("transparency", ExecutionMode.ASYNCHRONOUS),
    ActionName.LOCK_SCREEN: ("locker", ExecutionMode.ASYNCHRONOUS),
    ActionName.CAPTURE_SCREEN: ("capture", ExecutionMode.FIRE_AND_FORGET),
    ActionName.SET_VOLUME: ("mixer", ExecutionMode.SYNCHRONOUS),
    ActionName.RAISE_VOLUME: ("mixer", ExecutionMode.SYNCHRONOUS),
    ActionName.LOWER_VOLUME: ("mixer", ExecutionMode.SYNCHRONOUS),
    ActionName.MUTE_AUDIO: ("mixer", ExecutionMode.SYNCHRONOUS),
    ActionName.EXPORT_PDF_TO_TEXT: ("pdf_to_text", ExecutionMode.ASYNCHRONOUS),
}


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _tool_from_mapping(name: str, spec: Any, default: ToolConfig) -> ToolConfig:
    if isinstance(spec, str):
        return ToolConfig(executable=spec, arguments=default.arguments)
    if not isinstance(spec, dict):
        raise ConfigError(f"tools.{name} must be a mapping or an executable name.")
    unknown = sorted(set(spec) - {"executable", "arguments"})
    if unknown:
        raise ConfigError(f"Unknown key(s) in tools.{name}: {', '.join(unknown)}")
    return ToolConfig(
        executable=spec.get("executable", default.executable),
        arguments=spec.get("arguments", default.arguments) or "",
    )


def _check_opacity(key: str, value: Any) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or math.isnan(value)
        or not 0.0 <= value <= 1.0
    ):
        raise ConfigError(f"'{key}' must be a number between 0 and 1, got {value!r}.")


def _validate(config: DeskWrapConfig) -> None:
    for name in TOOL_FIELDS:
        tool = getattr(config, name)
        if not isinstance(tool, ToolConfig):
            raise ConfigError(f"'{name}' must be a ToolConfig.")
        if not isinstance(tool.executable, str) or not tool.executable.strip():
            raise ConfigError(f"tools.{name}.executable must be a non-empty string.")
        if not isinstance(tool.arguments, str):
            raise ConfigError(f"tools.{name}.arguments must be a string.")

    _check_opacity("default_opacity", config.default_opacity)
    _check_opacity("window_opacity", config.window_opacity)

    if isinstance(config.volume_step, bool) or not isinstance(config.volume_step, int):
        raise ConfigError(f"'volume_step' must be an integer, got {config.volume_step!r}.")
    if config.volume_step < 0:
        raise ConfigError("'volume_step' must not be negative.")

    for key in ("window_transparency_arguments", "capture_directory", "command_template"):
        if not isinstance(getattr(config, key), str):
            raise ConfigError(f"'{key}' must be a string.")
    if not config.capture_directory.strip():
        raise ConfigError("'capture_directory' must not be empty.")

    if config.search_path is not None and (
        not isinstance(config.search_path, tuple)
        or not all(isinstance(entry, str) for entry in config.search_path)
    ):
        raise ConfigError("'search_path' must be a tuple of directory strings.")

    template = config.command_template
    if "{executable}" not in template or "{arguments}" not in template:
        raise ConfigError(
            "'command_template' must contain {executable} and {arguments}.",
            hint=f"Default: {DEFAULT_COMMAND_TEMPLATE!r}",
        )
    try:
        template.format(executable="", arguments="")
    except (KeyError, IndexError, ValueError) as exc:
        raise ConfigError(f"'command_template' is not a valid format string: {exc}") from exc


_DEFAULTS = DeskWrapConfig()
