"""Tests for interactive prompts."""

from unittest.mock import patch

import pytest

from compsync.config import SyncConfig
from compsync.sync import ClassificationResult, ComponentStatus
from compsync.tui import (
    UPDATE_CANCEL,
    UPDATE_OUTDATED,
    UPDATE_SELECT,
    confirm_modified,
    confirm_package_install,
    prompt_project_config,
    select_components,
    select_update_choice,
)


class TestRequiresTty:
    def test_prompt_project_config(self, mock_no_tty):
        with pytest.raises(RuntimeError, match="requires a TTY"):
            prompt_project_config(SyncConfig())

    def test_select_update_choice(self, mock_no_tty):
        with pytest.raises(RuntimeError, match="requires a TTY"):
            select_update_choice(1, 0)

    def test_confirm_modified(self, mock_no_tty):
        with pytest.raises(RuntimeError, match="requires a TTY"):
            confirm_modified(["card"])


class TestPromptProjectConfig:
    def test_returns_answers(self, mock_tty):
        with patch("questionary.text") as mock_text, patch(
            "questionary.select"
        ) as mock_select:
            mock_text.return_value.ask.return_value = " src/ui "
            mock_select.return_value.ask.return_value = "bun"
            config = prompt_project_config(SyncConfig())

        assert config == SyncConfig(out_dir="src/ui", package_manager="bun")

    def test_blank_out_dir_uses_default(self, mock_tty):
        with patch("questionary.text") as mock_text, patch(
            "questionary.select"
        ) as mock_select:
            mock_text.return_value.ask.return_value = ""
            mock_select.return_value.ask.return_value = "npm"
            config = prompt_project_config(SyncConfig(out_dir="ui"))

        assert config.out_dir == "ui"

    def test_cancel(self, mock_tty):
        with patch("questionary.text") as mock_text:
            mock_text.return_value.ask.return_value = None
            assert prompt_project_config(SyncConfig()) is None


class TestSelectUpdateChoice:
    def test_offers_outdated_option(self, mock_tty):
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = UPDATE_OUTDATED
            assert select_update_choice(2, 1) == UPDATE_OUTDATED

        values = [c.value for c in mock_select.call_args.kwargs["choices"]]
        assert values == [UPDATE_OUTDATED, UPDATE_SELECT, UPDATE_CANCEL]

    def test_no_outdated_hides_option(self, mock_tty):
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.return_value = UPDATE_CANCEL
            select_update_choice(0, 1)

        values = [c.value for c in mock_select.call_args.kwargs["choices"]]
        assert values == [UPDATE_SELECT, UPDATE_CANCEL]

    def test_keyboard_interrupt_returns_none(self, mock_tty):
        with patch("questionary.select") as mock_select:
            mock_select.return_value.ask.side_effect = KeyboardInterrupt
            assert select_update_choice(1, 0) is None


class TestSelectComponents:
    def test_modified_start_unchecked(self, mock_tty):
        results = [
            ClassificationResult("button", ComponentStatus.OUTDATED),
            ClassificationResult("card", ComponentStatus.MODIFIED),
            ClassificationResult("dialog", ComponentStatus.UP_TO_DATE),
        ]
        with patch("questionary.checkbox") as mock_cb:
            mock_cb.return_value.ask.return_value = ["button"]
            assert select_components(results) == ["button"]

        choices = mock_cb.call_args.kwargs["choices"]
        assert [(c.value, c.checked) for c in choices] == [
            ("button", True),
            ("card", False),
        ]

    def test_nothing_to_offer(self, mock_tty):
        results = [ClassificationResult("dialog", ComponentStatus.UP_TO_DATE)]
        with patch("questionary.checkbox") as mock_cb:
            assert select_components(results) == []
        mock_cb.assert_not_called()


def test_confirm_package_install(mock_tty):
    with patch("questionary.confirm") as mock_confirm:
        mock_confirm.return_value.ask.return_value = True
        assert confirm_package_install(["clsx"], "pnpm")

    assert "pnpm" in mock_confirm.call_args[0][0]


def test_confirm_modified_cancel(mock_tty):
    with patch("questionary.confirm") as mock_confirm:
        mock_confirm.return_value.ask.return_value = None
        assert confirm_modified(["card"]) is False
