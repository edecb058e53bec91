"""Report rendering."""

from .reports import render_json, render_report

__all__ = ["render_json", "render_report"]
