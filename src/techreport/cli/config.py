"""techreport configuration.

Loads configuration from TOML files with environment variable overrides
(``TECHREPORT_`` prefix). Uses :mod:`tomllib` on Python 3.11+.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from techreport.llm.models import DEFAULT_MODEL, GatewayConfig

DEFAULT_CONFIG_DIR = ".techreport"
DEFAULT_CONFIG_FILE = "config.toml"
ENV_PREFIX = "TECHREPORT_"


class TechReportConfig(BaseModel):
    """Application configuration with sensible defaults.

    Every field can be overridden by an environment variable, e.g.
    ``TECHREPORT_LLM_MODEL=cerebras/llama3.1-8b``.
    """

    model_config = ConfigDict(extra="ignore")

    project_dir: Path = Field(default_factory=Path.cwd)
    llm_provider: str = "cerebras"
    llm_model: str = DEFAULT_MODEL
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2000, gt=0)
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def model_id(self) -> str:
        """LiteLLM model identifier, prefixed with the provider when bare.

        ``llm_model = "llama3.1-8b"`` with the default provider gives
        ``cerebras/llama3.1-8b``; a model that already names its provider
        is used as-is.
        """
        model = self.llm_model.strip()
        provider = self.llm_provider.strip()
        if not model or not provider or "/" in model:
            return model
        return f"{provider}/{model}"

    def gateway_config(self) -> GatewayConfig:
        """Gateway settings derived from this configuration."""
        return GatewayConfig(
            model=self.model_id(),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


def _apply_env_overrides(data: dict) -> dict:
    """Apply ``TECHREPORT_`` environment variable overrides to *data*."""
    field_names = set(TechReportConfig.model_fields.keys())
    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            name = key[len(ENV_PREFIX):].lower()
            if name in field_names:
                data[name] = value
    return data


def load_config(config_path: Path | None = None, project_dir: Path | None = None) -> TechReportConfig:
    """Load configuration from a TOML file with env-var overrides.

    Parameters
    ----------
    config_path:
        Explicit path to a TOML file. When *None*, looks for
        ``<project_dir>/.techreport/config.toml``.
    project_dir:
        Project root directory. Defaults to :func:`Path.cwd`.

    Returns
    -------
    TechReportConfig
        Parsed and validated configuration.
    """
    project = project_dir or Path.cwd()
    path = config_path or (project / DEFAULT_CONFIG_DIR / DEFAULT_CONFIG_FILE)

    data: dict = {}
    if path.exists():
        with open(path, "rb") as fh:
            data = tomllib.load(fh)

    # Sections ([general], [llm], ...) are flattened into one namespace
    flat: dict = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value

    flat.setdefault("project_dir", str(project))
    flat = _apply_env_overrides(flat)
    return TechReportConfig(**flat)


def default_config_toml() -> str:
    """Return the default configuration as a TOML string."""
    return f"""\
# techreport configuration

[general]
log_level = "INFO"

[llm]
llm_provider = "cerebras"
llm_model = "{DEFAULT_MODEL}"
temperature = 0.7
max_tokens = 2000
"""
