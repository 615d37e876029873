"""Rendering adapters."""

from echo_dashboard.adapters.render.markdown_renderer import MarkdownDashboardRenderer

__all__ = ["MarkdownDashboardRenderer"]
