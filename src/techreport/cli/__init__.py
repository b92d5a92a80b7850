"""techreport command-line interface built with Typer and Rich.

- :data:`app` – the Typer application
- :class:`TechReportConfig` – configuration model
- :func:`setup_logging` – logging setup
- :class:`CLIError` – structured error handling
"""

from techreport.cli.app import app
from techreport.cli.config import TechReportConfig, load_config
from techreport.cli.errors import CLIError, ConfigError, error_handler
from techreport.cli.logging_setup import setup_logging

__all__ = [
    "CLIError",
    "ConfigError",
    "TechReportConfig",
    "app",
    "error_handler",
    "load_config",
    "setup_logging",
]
