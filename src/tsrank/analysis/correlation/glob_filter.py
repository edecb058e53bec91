"""Declaration path filtering with shell-style globs."""

from __future__ import annotations

from typing import Iterable, List

from wcmatch import glob

from tsrank.core.errors import PatternError

from .extractor import Metric

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB | glob.DOTGLOB


def _anchor(pattern: str) -> str:
    # Relative patterns may match at any depth.
    while pattern.startswith("./"):
        pattern = pattern[2:]
    if pattern.startswith("/") or pattern.startswith("**"):
        return pattern
    return f"**/{pattern}"


def _subject(path: str, pattern: str) -> str:
    return path if pattern.startswith("/") else path.lstrip("/")


def compile_pattern(pattern: str) -> str:
    """Validate ``pattern`` eagerly so a bad glob fails before any matching work."""
    anchored = _anchor(pattern)
    try:
        glob.globmatch("", anchored, flags=GLOB_FLAGS)
    except Exception as exc:
        raise PatternError(f"invalid glob pattern {pattern!r}: {exc}") from exc
    return anchored


def matches(path: str, pattern: str) -> bool:
    anchored = compile_pattern(pattern)
    return glob.globmatch(_subject(path, anchored), anchored, flags=GLOB_FLAGS)


def filter_metrics(metrics: Iterable[Metric], pattern: str) -> List[Metric]:
    anchored = compile_pattern(pattern)
    return [
        metric
        for metric in metrics
        if glob.globmatch(_subject(metric.path, anchored), anchored, flags=GLOB_FLAGS)
    ]
