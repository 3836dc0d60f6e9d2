"""
Markdown export of the archive, rendered with Jinja2 templates.
"""
from .exporter import MarkdownExporter, export_markdown, write_if_changed
from .renderer import MarkdownRenderer

__all__ = ["MarkdownExporter", "MarkdownRenderer", "export_markdown", "write_if_changed"]
