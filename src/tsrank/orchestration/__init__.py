"""Orchestration helpers."""

from .pipeline import build_report, run_report

__all__ = ["build_report", "run_report"]
