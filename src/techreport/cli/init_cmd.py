"""``techreport init``: create the ``.techreport/`` directory and config."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from techreport.cli.config import DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE, default_config_toml
from techreport.cli.errors import CLIError


def run_init(path: Optional[Path] = None) -> Path:
    """Write a default configuration under *path* (default: cwd).

    Returns
    -------
    Path
        The path of the written configuration file.
    """
    project_dir = (path or Path.cwd()).resolve()

    if not project_dir.exists():
        raise CLIError(f"Directory does not exist: {project_dir}")
    if not project_dir.is_dir():
        raise CLIError(f"Not a directory: {project_dir}")

    config_dir = project_dir / DEFAULT_CONFIG_DIR
    config_path = config_dir / DEFAULT_CONFIG_FILE
    if config_path.exists():
        raise CLIError(
            f"Already initialised: {config_path} exists.\n"
            "Remove it first or use a different directory."
        )

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path.write_text(default_config_toml(), encoding="utf-8")
    return config_path
