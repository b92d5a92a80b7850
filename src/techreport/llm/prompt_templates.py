"""Jinja2 prompt templates shipped with :mod:`techreport.llm`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from techreport.llm.exceptions import TemplateError

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
_SUFFIX = ".jinja2"


class PromptTemplate:
    """Render ``*.jinja2`` prompt templates from a directory.

    Undefined variables are errors, so a template never silently renders
    an empty placeholder.

    Example::

        pt = PromptTemplate()
        prompt = pt.render("recommendations_user", report=report)
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        self._template_dir = template_dir or _DEFAULT_TEMPLATE_DIR
        if not self._template_dir.is_dir():
            raise TemplateError(
                f"Template directory does not exist: {self._template_dir}"
            )
        self._env = Environment(
            loader=FileSystemLoader(str(self._template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_name: str, **variables: Any) -> str:
        """Render *template_name* (without the ``.jinja2`` suffix).

        Raises:
            TemplateError: If the template is missing or a variable is
                undefined.
        """
        full_name = f"{template_name}{_SUFFIX}"
        try:
            template = self._env.get_template(full_name)
        except TemplateNotFound:
            raise TemplateError(
                f"Template '{full_name}' not found in {self._template_dir}"
            ) from None

        try:
            return template.render(**variables)
        except Exception as exc:
            raise TemplateError(
                f"Error rendering template '{full_name}': {exc}"
            ) from exc

    def list_templates(self) -> list[str]:
        """Names (without suffix) of all available templates."""
        return sorted(
            t.removesuffix(_SUFFIX)
            for t in self._env.list_templates()
            if t.endswith(_SUFFIX)
        )
