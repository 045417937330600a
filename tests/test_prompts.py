"""Tests for interactive prompts (cli/prompts.py).

``questionary`` is mocked — no terminal interaction.

Coverage:
* Validators reuse the formatter rules.
* Answers are converted to the right type.
* Ctrl+C / Esc (``None`` answer) aborts with ``KeyboardInterrupt``.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from deskwrap.cli.prompts import (
    _validate_opacity,
    _validate_volume,
    prompt_opacity,
    prompt_pdf_path,
    prompt_volume,
)
from deskwrap.core.models import VolumeMode


def _questionary(answer: object) -> MagicMock:
    module = MagicMock()
    module.text.return_value.ask.return_value = answer
    module.path.return_value.ask.return_value = answer
    return module


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

class TestValidators:
    def test_opacity_valid(self) -> None:
        assert _validate_opacity("0.4") is True

    def test_opacity_not_a_number(self) -> None:
        assert _validate_opacity("half") == "Enter a number, e.g. 0.8"

    def test_opacity_out_of_range(self) -> None:
        message = _validate_opacity("4")
        assert isinstance(message, str)
        assert "outside the range" in message

    def test_volume_valid(self) -> None:
        assert _validate_volume(VolumeMode.SET)("100") is True

    def test_volume_above_maximum_for_set(self) -> None:
        assert isinstance(_validate_volume(VolumeMode.SET)("150"), str)

    def test_volume_step_above_maximum_for_raise(self) -> None:
        assert _validate_volume(VolumeMode.RAISE)("150") is True

    def test_volume_not_an_integer(self) -> None:
        assert _validate_volume(VolumeMode.SET)("5.5") == "Enter a whole number"


# ---------------------------------------------------------------------------
# Prompt functions
# ---------------------------------------------------------------------------

class TestPromptOpacity:
    def test_returns_float(self) -> None:
        module = _questionary("0.6")
        with patch("deskwrap.cli.prompts._import_questionary", return_value=module):
            assert prompt_opacity(0.8) == 0.6
        _args, kwargs = module.text.call_args
        assert kwargs["default"] == "0.8"

    def test_cancel_aborts(self) -> None:
        with patch("deskwrap.cli.prompts._import_questionary", return_value=_questionary(None)):
            with pytest.raises(KeyboardInterrupt):
                prompt_opacity(0.8)


class TestPromptVolume:
    def test_returns_int(self) -> None:
        with patch("deskwrap.cli.prompts._import_questionary", return_value=_questionary("30")):
            assert prompt_volume(VolumeMode.SET) == 30

    def test_label_mentions_mode(self) -> None:
        module = _questionary("2")
        with patch("deskwrap.cli.prompts._import_questionary", return_value=module):
            prompt_volume(VolumeMode.LOWER)
        assert "lower" in module.text.call_args[0][0]


class TestPromptPdfPath:
    def test_strips_answer(self) -> None:
        with patch(
            "deskwrap.cli.prompts._import_questionary",
            return_value=_questionary("  ~/paper.pdf "),
        ):
            assert prompt_pdf_path() == "~/paper.pdf"

    def test_cancel_aborts(self) -> None:
        with patch("deskwrap.cli.prompts._import_questionary", return_value=_questionary(None)):
            with pytest.raises(KeyboardInterrupt):
                prompt_pdf_path()
