"""Rank type-check cost by declaration file or by symbol."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, List, Sequence

from tsrank.core.config import RankStrategy

from .extractor import Metric

logger = logging.getLogger(__name__)

SOURCE_BUCKET = "source"
DEPENDENCY_BUCKET = "dependencies"


@dataclass(frozen=True)
class RankedItem:
    duration_ms: float
    name: str
    path: str
    line: int
    column: int


@dataclass(frozen=True)
class RankedGroup:
    rank: int
    key: str
    total_ms: float
    percentage: int
    count: int
    items: List[RankedItem] = field(default_factory=list)


@dataclass(frozen=True)
class RankReport:
    strategy: RankStrategy
    trace_count: int
    catalog_count: int
    metric_count: int
    filtered_count: int
    grand_total_ms: float
    groups: List[RankedGroup] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["strategy"] = self.strategy.value
        return data


def to_ms(duration: float) -> float:
    return duration / 1000


def percentage(total: float, grand_total: float) -> int:
    """Share of ``grand_total`` as a whole percent, 0 when nothing was measured."""
    if grand_total <= 0:
        return 0
    # round half up; totals are never negative
    return int(total / grand_total * 100 + 0.5)


def sum_duration(metrics: Iterable[Metric]) -> float:
    return sum(metric.duration for metric in metrics)


def rank_items(metrics: Iterable[Metric], limit: int) -> List[RankedItem]:
    """Most expensive metrics first; equal durations keep their input order."""
    ordered = sorted(metrics, key=lambda m: m.duration, reverse=True)[:limit]
    return [
        RankedItem(
            duration_ms=to_ms(m.duration),
            name=m.name,
            path=m.path,
            line=m.start.line,
            column=m.start.character,
        )
        for m in ordered
    ]


def group_by_file(metrics: Iterable[Metric]) -> dict[str, list[Metric]]:
    groups: dict[str, list[Metric]] = {}
    for metric in metrics:
        groups.setdefault(metric.path, []).append(metric)
    return groups


def group_by_dependency(metrics: Iterable[Metric]) -> dict[str, list[Metric]]:
    groups: dict[str, list[Metric]] = {SOURCE_BUCKET: [], DEPENDENCY_BUCKET: []}
    for metric in metrics:
        groups[DEPENDENCY_BUCKET if metric.is_dependency else SOURCE_BUCKET].append(metric)
    return groups


def _order_groups(
    groups: dict[str, list[Metric]], strategy: RankStrategy, group_limit: int
) -> list[tuple[str, list[Metric], float]]:
    totals = [(key, members, sum_duration(members)) for key, members in groups.items()]
    if strategy is RankStrategy.SYMBOLS:
        # fixed bucket order, no truncation
        return totals
    totals.sort(key=lambda entry: entry[0])
    totals.sort(key=lambda entry: entry[2], reverse=True)
    return totals[:group_limit]


def rank_metrics(
    metrics: Sequence[Metric],
    *,
    strategy: RankStrategy = RankStrategy.FILES,
    group_limit: int = 50,
    item_limit: int = 10,
    trace_count: int = 0,
    catalog_count: int = 0,
    metric_count: int | None = None,
    warnings: Iterable[str] = (),
) -> RankReport:
    """Group ``metrics`` per ``strategy`` and rank groups and their members by duration.

    File groups are ordered by total duration descending, then by path.  The
    grand total covers every metric passed in, including groups cut off by
    ``group_limit``.
    """
    if strategy is RankStrategy.FILES:
        grouped = group_by_file(metrics)
    else:
        grouped = group_by_dependency(metrics)

    grand_total = sum_duration(metrics)
    ranked: list[RankedGroup] = []
    for rank, (key, members, total) in enumerate(
        _order_groups(grouped, strategy, group_limit), start=1
    ):
        ranked.append(
            RankedGroup(
                rank=rank,
                key=key,
                total_ms=to_ms(total),
                percentage=percentage(total, grand_total),
                count=len(members),
                items=rank_items(members, item_limit),
            )
        )

    logger.info(
        "Ranked metrics: strategy=%s metrics=%d groups=%d/%d",
        strategy.value,
        len(metrics),
        len(ranked),
        len(grouped),
    )
    return RankReport(
        strategy=strategy,
        trace_count=trace_count,
        catalog_count=catalog_count,
        metric_count=len(metrics) if metric_count is None else metric_count,
        filtered_count=len(metrics),
        grand_total_ms=to_ms(grand_total),
        groups=ranked,
        warnings=list(warnings),
    )
