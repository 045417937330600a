"""Shared pytest fixtures and configuration for the deskwrap test suite.

Guidelines
----------
* No test launches a real desktop utility.
* The resolver and executor are faked at the protocol boundary.
* Core tests must be pure — no side effects outside ``tmp_path``.
* Tests must not depend on which utilities are installed.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from deskwrap.core.actions import DesktopActions
from deskwrap.core.config import DeskWrapConfig
from deskwrap.core.invocation_service import InvocationService
from deskwrap.core.models import RunOutcome
from deskwrap.exceptions import ExecutableNotFoundError


class FakeResolver:
    """Resolves only the names it was given, recording every lookup."""

    def __init__(self, *available: str) -> None:
        self.available: set[str] = set(available)
        self.calls: list[tuple[str, tuple[str, ...] | None]] = []

    def resolve(self, name: str, search_path: Sequence[str] | None = None) -> Path:
        self.calls.append((name, tuple(search_path) if search_path is not None else None))
        if name not in self.available:
            raise ExecutableNotFoundError(name)
        return Path("/usr/bin") / name


class FakeExecutor:
    """Records spawns instead of starting processes."""

    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.outcome = RunOutcome(returncode=returncode, stderr=stderr)
        self.calls: list[tuple[str, object, Path | None]] = []

    def run(self, argv: Sequence[str], *, cwd: Path | None = None) -> RunOutcome:
        self.calls.append(("run", list(argv), cwd))
        return self.outcome

    def spawn_shell(self, command: str, *, cwd: Path | None = None) -> int:
        self.calls.append(("spawn_shell", command, cwd))
        return 4242

    def spawn(self, argv: Sequence[str], *, cwd: Path | None = None) -> int:
        self.calls.append(("spawn", list(argv), cwd))
        return 4343


ALL_TOOLS = ("transset-df", "slock", "scrot", "aumix", "pdftotext")


@pytest.fixture()
def fake_resolver() -> FakeResolver:
    return FakeResolver(*ALL_TOOLS)


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def service(fake_resolver: FakeResolver, fake_executor: FakeExecutor) -> InvocationService:
    return InvocationService(fake_resolver, fake_executor, DeskWrapConfig())


@pytest.fixture()
def actions(service: InvocationService) -> DesktopActions:
    return DesktopActions(service)
