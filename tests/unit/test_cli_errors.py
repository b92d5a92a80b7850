"""Unit tests for techreport.cli.errors."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from techreport.advisor.exceptions import ChatError
from techreport.cli.errors import (
    EXIT_CONFIG_ERROR,
    EXIT_GENERAL_ERROR,
    EXIT_INTERRUPTED,
    CLIError,
    ConfigError,
    error_handler,
)
from techreport.llm.exceptions import ConfigurationError
from techreport.recommendations.exceptions import MarkdownRenderError


class TestCLIError:
    def test_default_exit_code(self) -> None:
        err = CLIError("something broke")
        assert err.message == "something broke"
        assert err.exit_code == EXIT_GENERAL_ERROR
        assert str(err) == "something broke"

    def test_config_error(self) -> None:
        err = ConfigError("missing key")
        assert isinstance(err, CLIError)
        assert err.exit_code == EXIT_CONFIG_ERROR


class TestErrorHandler:
    def test_no_exception_passes_through(self) -> None:
        with error_handler(MagicMock()):
            value = 1
        assert value == 1

    def test_cli_error_exit_code(self) -> None:
        console = MagicMock()
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(console):
                raise ConfigError("bad config")
        assert exc_info.value.code == EXIT_CONFIG_ERROR
        console.print.assert_called_once()

    def test_unexpected_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(MagicMock()):
                raise RuntimeError("boom")
        assert exc_info.value.code == EXIT_GENERAL_ERROR

    def test_keyboard_interrupt(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(MagicMock()):
                raise KeyboardInterrupt
        assert exc_info.value.code == EXIT_INTERRUPTED

    def test_gateway_configuration_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(MagicMock()):
                raise ConfigurationError("No model configured for the LLM gateway")
        assert exc_info.value.code == EXIT_CONFIG_ERROR

    def test_advisor_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(MagicMock()):
                raise ChatError("Failed to get chat response: timeout")
        assert exc_info.value.code == EXIT_GENERAL_ERROR

    def test_render_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            with error_handler(MagicMock()):
                raise MarkdownRenderError("Markdown rendering failed: boom")
        assert exc_info.value.code == EXIT_GENERAL_ERROR

    def test_markup_in_message_is_escaped(self) -> None:
        console = Console(file=io.StringIO(), width=200)
        with pytest.raises(SystemExit):
            with error_handler(console):
                raise CLIError("Field required [type=missing, input_value={}]")
        assert "[type=missing" in console.file.getvalue()
