"""Tests for executable lookup (infra/executable_resolver.py).

Most tests mock :func:`shutil.which` — no system dependency.  A few use
real files in ``tmp_path`` to check custom search paths.

Coverage:
* ``detect_executable`` found / missing.
* ``require_executable`` happy path and ``ExecutableNotFoundError``.
* Custom search path is honoured and never falls back to ``$PATH``.
* Platform-specific install commands.
* ``ExecutableStatus`` frozen dataclass.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from deskwrap.exceptions import ExecutableNotFoundError
from deskwrap.infra.executable_resolver import (
    ExecutableStatus,
    PathExecutableResolver,
    _platform_install_commands,
    detect_executable,
    require_executable,
)


def _make_executable(directory: Path, name: str) -> Path:
    path = directory / name
    path.write_text("#!/bin/sh\nexit 0\n")
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return path


# ---------------------------------------------------------------------------
# detect_executable
# ---------------------------------------------------------------------------

class TestDetectExecutable:
    @patch("deskwrap.infra.executable_resolver.shutil.which")
    def test_found(self, mock_which: MagicMock) -> None:
        mock_which.return_value = "/usr/bin/scrot"
        status = detect_executable("scrot")

        assert status.found is True
        assert status.path == Path("/usr/bin/scrot")
        assert status.install_commands == ()
        mock_which.assert_called_once_with("scrot", path=None)

    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Linux")
    @patch("deskwrap.infra.executable_resolver.shutil.which", return_value=None)
    def test_not_found(self, _mock_which: MagicMock, _mock_sys: MagicMock) -> None:
        status = detect_executable("scrot")

        assert status.found is False
        assert status.path is None
        assert status.name == "scrot"
        assert "sudo apt install scrot" in status.install_commands

    def test_custom_search_path(self, tmp_path: Path) -> None:
        expected = _make_executable(tmp_path, "fake-mixer")
        status = detect_executable("fake-mixer", [str(tmp_path)])
        assert status.found is True
        assert status.path == expected

    def test_custom_search_path_excludes_path_env(self, tmp_path: Path) -> None:
        # "sh" is on every PATH but not in an empty directory.
        status = detect_executable("sh", [str(tmp_path)])
        assert status.found is False

    def test_absolute_path_is_checked_directly(self, tmp_path: Path) -> None:
        expected = _make_executable(tmp_path, "pdftotext")
        status = detect_executable(str(expected), [])
        assert status.found is True
        assert status.path == expected

    def test_non_executable_file_is_not_found(self, tmp_path: Path) -> None:
        (tmp_path / "slock").write_text("not a program")
        assert detect_executable("slock", [str(tmp_path)]).found is False


# ---------------------------------------------------------------------------
# require_executable / resolver
# ---------------------------------------------------------------------------

class TestRequireExecutable:
    @patch("deskwrap.infra.executable_resolver.shutil.which", return_value="/usr/bin/aumix")
    def test_found_returns_path(self, _mock_which: MagicMock) -> None:
        assert require_executable("aumix") == Path("/usr/bin/aumix")

    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Linux")
    @patch("deskwrap.infra.executable_resolver.shutil.which", return_value=None)
    def test_missing_raises_with_hint(self, _mock_which: MagicMock, _mock_sys: MagicMock) -> None:
        with pytest.raises(ExecutableNotFoundError, match="aumix is not installed") as exc_info:
            require_executable("aumix")
        assert exc_info.value.name == "aumix"
        assert exc_info.value.hint is not None
        assert "Install aumix" in exc_info.value.hint

    @patch("deskwrap.infra.executable_resolver.shutil.which", return_value=None)
    def test_unknown_program_has_no_hint(self, _mock_which: MagicMock) -> None:
        with pytest.raises(ExecutableNotFoundError) as exc_info:
            require_executable("definitely-not-a-tool")
        assert exc_info.value.hint is None

    def test_resolver_uses_search_path(self, tmp_path: Path) -> None:
        expected = _make_executable(tmp_path, "slock")
        resolver = PathExecutableResolver()
        assert resolver.resolve("slock", [str(tmp_path)]) == expected

    def test_resolver_never_substitutes(self, tmp_path: Path) -> None:
        _make_executable(tmp_path, "xtrlock")
        with pytest.raises(ExecutableNotFoundError):
            PathExecutableResolver().resolve("slock", [str(tmp_path)])


# ---------------------------------------------------------------------------
# Platform install commands
# ---------------------------------------------------------------------------

class TestPlatformInstallCommands:
    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Linux")
    def test_linux_commands(self, _mock_sys: MagicMock) -> None:
        cmds = _platform_install_commands("pdftotext")
        assert "sudo apt install poppler-utils" in cmds
        assert "sudo pacman -S poppler" in cmds

    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Linux")
    def test_linux_partial_availability(self, _mock_sys: MagicMock) -> None:
        assert _platform_install_commands("transset-df") == ("sudo apt install transset-df",)

    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Darwin")
    def test_darwin_commands(self, _mock_sys: MagicMock) -> None:
        assert _platform_install_commands("pdftotext") == ("brew install poppler",)
        assert _platform_install_commands("slock") == ()

    @patch("deskwrap.infra.executable_resolver.platform.system", return_value="Linux")
    def test_configured_path_uses_basename(self, _mock_sys: MagicMock) -> None:
        cmds = _platform_install_commands(os.path.join("/opt", "bin", "scrot"))
        assert "sudo apt install scrot" in cmds

    def test_unknown_program(self) -> None:
        assert _platform_install_commands("frobnicate") == ()


# ---------------------------------------------------------------------------
# ExecutableStatus dataclass
# ---------------------------------------------------------------------------

class TestExecutableStatus:
    def test_frozen(self) -> None:
        status = ExecutableStatus(
            name="scrot",
            found=True,
            path=Path("/usr/bin/scrot"),
            install_commands=(),
        )
        with pytest.raises(AttributeError):
            status.found = False  # type: ignore[misc]
