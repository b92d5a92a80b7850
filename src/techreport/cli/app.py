"""techreport CLI application entry point.

Built with `Typer <https://typer.tiangolo.com/>`_ and
`Rich <https://rich.readthedocs.io/>`_.
"""

from __future__ import annotations

import html
import json
import logging
import re
import sys
import tomllib
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from techreport.advisor import RecommendationService, ReportData
from techreport.cli.config import TechReportConfig, load_config
from techreport.cli.errors import CLIError, ConfigError, error_handler
from techreport.cli.init_cmd import run_init
from techreport.cli.logging_setup import setup_logging
from techreport.llm import LLMGateway
from techreport.recommendations import Recommendation, parse_recommendations

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="techreport",
    help="techreport – AI-assisted IT support report recommendations.",
    add_completion=False,
    no_args_is_help=True,
)

_console = Console(stderr=True)
_stdout = Console()

_TAG = re.compile(r"<[^>]+>")


def _version_callback(value: bool) -> None:
    if value:
        from techreport import __version__

        _console.print(f"techreport {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) output.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration TOML file.",
    ),
) -> None:
    """Global options for the techreport CLI."""
    with error_handler(_console):
        try:
            cfg = load_config(config_path=config)
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

        setup_logging("DEBUG" if verbose else cfg.log_level, cfg.log_file)
        ctx.obj = cfg


def _config(ctx: typer.Context) -> TechReportConfig:
    return ctx.obj if isinstance(ctx.obj, TechReportConfig) else load_config()


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise CLIError(f"File not found: {path}")
    return path.read_text(encoding="utf-8")


def _strip_tags(markup: str) -> str:
    """Plain-text view of rendered HTML for terminal output."""
    return " ".join(html.unescape(_TAG.sub("", markup)).split())


def _print_recommendations(records: list[Recommendation]) -> None:
    table = Table(title=f"{len(records)} recommendation(s)", show_lines=True)
    table.add_column("#", justify="right")
    table.add_column("Priority")
    table.add_column("Urgency")
    table.add_column("Title", style="bold")
    table.add_column("Steps")
    for index, rec in enumerate(records, 1):
        steps = "\n".join(f"{i}. {_strip_tags(step)}" for i, step in enumerate(rec.steps, 1))
        table.add_row(str(index), rec.priority, rec.urgency, rec.title, steps)
    _stdout.print(table)


def _dump(records: list[Recommendation]) -> str:
    return json.dumps([rec.model_dump() for rec in records], indent=2)


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help="Target directory. Defaults to the current directory.",
    ),
) -> None:
    """Create ``.techreport/config.toml`` with default settings."""
    with error_handler(_console):
        config_path = run_init(path)
        _console.print(f"[green]Wrote default configuration to {config_path}[/green]")


@app.command()
def parse(
    source: str = typer.Argument(
        ...,
        help="File containing a saved model response, or '-' to read stdin.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print recommendations as JSON.",
    ),
) -> None:
    """Extract recommendations from a saved model response."""
    with error_handler(_console):
        records = parse_recommendations(_read_source(source))
        if json_output:
            typer.echo(_dump(records))
        else:
            _print_recommendations(records)


@app.command()
def generate(
    ctx: typer.Context,
    report_file: Path = typer.Argument(..., help="Report data as a JSON file."),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="LiteLLM model identifier. Defaults to the configured model.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the full result (raw text, records, metadata) as JSON.",
    ),
) -> None:
    """Ask the model for recommendations on a report."""
    with error_handler(_console):
        if not report_file.is_file():
            raise CLIError(f"File not found: {report_file}")
        try:
            report = ReportData.model_validate_json(report_file.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise CLIError(f"Invalid report file {report_file}:\n{exc}") from exc

        gateway_config = _config(ctx).gateway_config()
        if model:
            gateway_config.model = model
        service = RecommendationService(gateway=LLMGateway(gateway_config))

        with _console.status("Generating recommendations..."):
            result = service.generate(report)

        if json_output:
            typer.echo(result.model_dump_json(indent=2))
        else:
            _print_recommendations(result.structured)


@app.command()
def chat(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Question for the IT support assistant."),
) -> None:
    """Ask the IT support assistant a one-off question."""
    with error_handler(_console):
        service = RecommendationService(gateway=LLMGateway(_config(ctx).gateway_config()))
        typer.echo(service.chat(message))
