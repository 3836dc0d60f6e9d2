#!/usr/bin/env python3
"""
renderer.py
-----------
Jinja2 template engine for Markdown export.

Supports both filesystem-based templates (production) and dict-based
templates (testing).

Usage:
    from diary.export.renderer import MarkdownRenderer

    # Production: loads from diary/export/templates/
    renderer = MarkdownRenderer()
    content = renderer.render("entry.md.jinja2", context)

    # Testing: supply templates as dict
    renderer = MarkdownRenderer(templates={"test.jinja2": "Hello {{ name }}"})
    content = renderer.render("test.jinja2", {"name": "World"})

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third-party imports ---
from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader, TemplateError

# --- Local imports ---
from diary.core.exceptions import ExportError
from diary.core.paths import EXPORT_TEMPLATES_DIR

from . import filters as export_filters


class MarkdownRenderer:
    """
    Jinja2-based Markdown renderer.

    Attributes:
        env: Configured Jinja2 Environment instance
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the renderer.

        Args:
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name -> template_string (DictLoader)

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError("Provide either templates_dir or templates, not both")

        loader: BaseLoader
        if templates is not None:
            loader = DictLoader(templates)
        elif templates_dir is not None:
            loader = FileSystemLoader(str(templates_dir))
        else:
            loader = FileSystemLoader(str(EXPORT_TEMPLATES_DIR))

        self.env = Environment(
            loader=loader,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["day_month_year"] = export_filters.day_month_year
        self.env.filters["blockquote"] = export_filters.blockquote
        self.env.filters["notes_inline"] = export_filters.notes_inline

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Raises:
            ExportError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise ExportError(f"While rendering template '{template_name}': {e}") from e
