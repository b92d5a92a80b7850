"""CLI error handling.

Exit codes:
    0 - Success
    1 - General error (bad input, failed generation, rendering fault)
    2 - Configuration error (bad config file, no model configured)
    130 - Interrupted
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Generator

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from techreport.advisor.exceptions import AdvisorError
from techreport.llm.exceptions import ConfigurationError
from techreport.recommendations.exceptions import RecommendationError

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """An error reported to the user with a specific exit code.

    Parameters
    ----------
    message:
        Human-readable error description.
    exit_code:
        Process exit code (default :data:`EXIT_GENERAL_ERROR`).
    """

    def __init__(self, message: str, exit_code: int = EXIT_GENERAL_ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(CLIError):
    """Configuration could not be loaded or validated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, exit_code=EXIT_CONFIG_ERROR)


_stderr = Console(stderr=True)


def _fail(out: Console, message: str, title: str, exit_code: int) -> None:
    out.print(
        Panel(
            f"[bold red]{escape(message)}[/bold red]",
            title=f"[red]{title}[/red]",
            border_style="red",
        )
    )
    sys.exit(exit_code)


@contextmanager
def error_handler(console: Console | None = None) -> Generator[None, None, None]:
    """Print a Rich error panel and exit for any error raised in the block.

    Advisor and recommendation errors exit with 1, a gateway
    :class:`~techreport.llm.exceptions.ConfigurationError` with 2.

    Raises
    ------
    SystemExit
        Always, when an exception is caught, with the matching exit code.
    """
    out = console or _stderr
    try:
        yield
    except CLIError as exc:
        _fail(out, exc.message, "Error", exc.exit_code)
    except ConfigurationError as exc:
        _fail(out, str(exc), "Configuration Error", EXIT_CONFIG_ERROR)
    except (AdvisorError, RecommendationError) as exc:
        _fail(out, str(exc), "Error", EXIT_GENERAL_ERROR)
    except KeyboardInterrupt:
        out.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        _fail(out, str(exc), "Unexpected Error", EXIT_GENERAL_ERROR)
