"""Pair catalog symbols with the check events that measured them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from tsrank.analysis.traces.trace_parser import TraceEvent
from tsrank.analysis.traces.types_parser import CatalogEntry, Position, SymbolType

from .index import DEFAULT_CHECK_CATEGORIES, DEFAULT_CHECK_NAMES, build_check_index

logger = logging.getLogger(__name__)

DEFAULT_DEPENDENCY_MARKER = "/node_modules"


@dataclass(frozen=True)
class Metric:
    symbol: SymbolType
    check: TraceEvent
    is_dependency: bool = False

    @property
    def path(self) -> str:
        return self.symbol.first_declaration.path

    @property
    def start(self) -> Position:
        return self.symbol.first_declaration.start

    @property
    def name(self) -> str:
        return self.symbol.symbol_name

    @property
    def duration(self) -> float:
        """Check duration in trace units (microseconds)."""
        return self.check.dur


def extract_metrics(
    trace: Iterable[TraceEvent],
    catalog: Iterable[CatalogEntry],
    *,
    check_names: Iterable[str] = DEFAULT_CHECK_NAMES,
    check_categories: Iterable[str] = DEFAULT_CHECK_CATEGORIES,
    dependency_marker: str = DEFAULT_DEPENDENCY_MARKER,
) -> List[Metric]:
    """Return one metric per declared symbol that has an indexed check, in catalog order."""
    index = build_check_index(trace, check_names, check_categories)
    metrics: list[Metric] = []
    undeclared = 0
    for entry in catalog:
        if not isinstance(entry, SymbolType):
            continue
        declaration = entry.first_declaration
        if declaration is None:
            undeclared += 1
            continue
        check = index.get(entry.id)
        if check is None:
            continue
        metrics.append(
            Metric(
                symbol=entry,
                check=check,
                is_dependency=dependency_marker in declaration.path,
            )
        )
    logger.info("Extracted metrics: metrics=%d undeclared_symbols=%d", len(metrics), undeclared)
    return metrics
