"""Unit tests for techreport.cli.app – the main Typer application."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from techreport.advisor.exceptions import ChatError, RecommendationGenerationError
from techreport.advisor.models import GenerationMetadata, RecommendationResult
from techreport.cli.app import app
from techreport.recommendations.models import Recommendation

runner = CliRunner()

_BLOCK = (
    "```recommendation\n"
    + json.dumps({"title": "Replace battery", "steps": ["Order **part**"], "priority": "High"})
    + "\n```"
)

_REPORT = {
    "machineDetails": {"make": "HP", "model": "EliteBook 840"},
    "userComplaint": "Battery drains fast",
    "findings": ["Battery health 41%"],
}


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each command from an empty directory with no env overrides."""
    monkeypatch.chdir(tmp_path)
    for key in ("TECHREPORT_LOG_LEVEL", "TECHREPORT_LLM_MODEL", "TECHREPORT_LOG_FILE"):
        monkeypatch.delenv(key, raising=False)
    yield
    logging.getLogger("techreport").handlers.clear()


def _result() -> RecommendationResult:
    rec = Recommendation(id="rec_1_abcdefghi", title="Replace battery", priority="High", steps=["Order"])
    return RecommendationResult(
        raw=_BLOCK,
        structured=[rec],
        metadata=GenerationMetadata(
            total_recommendations=1,
            priority_breakdown={"Critical": 0, "High": 1, "Medium": 0, "Low": 0},
        ),
    )


# ---------------------------------------------------------------------------
# Global options
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "techreport 0.1.0" in result.output

    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("init", "parse", "generate", "chat"):
            assert command in result.output

    def test_invalid_config_exit_code(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("not = [valid")
        result = runner.invoke(app, ["--config", str(bad), "parse", "-"], input="")
        assert result.exit_code == 2

    def test_invalid_config_value(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("temperature = 9.0\n")
        result = runner.invoke(app, ["-c", str(bad), "parse", "-"], input="")
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


class TestInit:
    def test_creates_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 0
        assert (tmp_path / ".techreport" / "config.toml").is_file()

    def test_second_init_fails(self, tmp_path: Path) -> None:
        runner.invoke(app, ["init", str(tmp_path)])
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------------


class TestParse:
    def test_json_output(self, tmp_path: Path) -> None:
        source = tmp_path / "response.md"
        source.write_text("Intro\n" + _BLOCK)
        result = runner.invoke(app, ["parse", str(source), "--json"])
        assert result.exit_code == 0
        (record,) = json.loads(result.stdout)
        assert record["title"] == "Replace battery"
        assert record["steps"] == ["Order <strong>part</strong>"]
        assert record["category"] == "General"

    def test_stdin(self) -> None:
        result = runner.invoke(app, ["parse", "-", "-j"], input=_BLOCK)
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["priority"] == "High"

    def test_table_output(self, tmp_path: Path) -> None:
        source = tmp_path / "response.md"
        source.write_text(_BLOCK)
        result = runner.invoke(app, ["parse", str(source)])
        assert result.exit_code == 0
        assert "Replace" in result.output
        assert "<strong>" not in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["parse", str(tmp_path / "nope.md")])
        assert result.exit_code == 1
        assert "File not found" in result.output


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    def _report_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "report.json"
        path.write_text(json.dumps(_REPORT))
        return path

    @patch("techreport.cli.app.LLMGateway")
    @patch("techreport.cli.app.RecommendationService")
    def test_json_output(self, mock_service_cls: MagicMock, mock_gateway_cls: MagicMock, tmp_path: Path) -> None:
        mock_service_cls.return_value.generate.return_value = _result()
        result = runner.invoke(app, ["generate", str(self._report_file(tmp_path)), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["metadata"]["total_recommendations"] == 1
        assert data["structured"][0]["title"] == "Replace battery"
        report = mock_service_cls.return_value.generate.call_args.args[0]
        assert report.machine_details.make == "HP"

    @patch("techreport.cli.app.LLMGateway")
    @patch("techreport.cli.app.RecommendationService")
    def test_model_override(self, mock_service_cls: MagicMock, mock_gateway_cls: MagicMock, tmp_path: Path) -> None:
        mock_service_cls.return_value.generate.return_value = _result()
        runner.invoke(app, ["generate", str(self._report_file(tmp_path)), "-m", "openai/gpt-4o-mini"])
        gateway_config = mock_gateway_cls.call_args.args[0]
        assert gateway_config.model == "openai/gpt-4o-mini"

    @patch("techreport.cli.app.LLMGateway")
    @patch("techreport.cli.app.RecommendationService")
    def test_generation_failure(self, mock_service_cls: MagicMock, mock_gateway_cls: MagicMock, tmp_path: Path) -> None:
        mock_service_cls.return_value.generate.side_effect = RecommendationGenerationError(
            "Failed to generate recommendations: timeout"
        )
        result = runner.invoke(app, ["generate", str(self._report_file(tmp_path))])
        assert result.exit_code == 1
        assert "Failed to generate" in result.output

    def test_invalid_report(self, tmp_path: Path) -> None:
        path = tmp_path / "report.json"
        path.write_text(json.dumps({"machineDetails": {"make": "HP"}}))
        result = runner.invoke(app, ["generate", str(path)])
        assert result.exit_code == 1
        assert "Invalid report file" in result.output

    def test_missing_report(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["generate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


# ---------------------------------------------------------------------------
# chat
# ---------------------------------------------------------------------------


class TestChat:
    @patch("techreport.cli.app.LLMGateway")
    @patch("techreport.cli.app.RecommendationService")
    def test_prints_reply(self, mock_service_cls: MagicMock, mock_gateway_cls: MagicMock) -> None:
        mock_service_cls.return_value.chat.return_value = "Try a new charger."
        result = runner.invoke(app, ["chat", "Battery dies fast"])
        assert result.exit_code == 0
        assert "Try a new charger." in result.stdout
        mock_service_cls.return_value.chat.assert_called_once_with("Battery dies fast")

    @patch("techreport.cli.app.LLMGateway")
    @patch("techreport.cli.app.RecommendationService")
    def test_failure(self, mock_service_cls: MagicMock, mock_gateway_cls: MagicMock) -> None:
        mock_service_cls.return_value.chat.side_effect = ChatError("Failed to get chat response: x")
        result = runner.invoke(app, ["chat", "hello"])
        assert result.exit_code == 1

    def test_blank_model_is_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TECHREPORT_LLM_MODEL", " ")
        result = runner.invoke(app, ["chat", "hello"])
        assert result.exit_code == 2
