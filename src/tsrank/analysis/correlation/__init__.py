"""Correlation logic."""

from .extractor import Metric, extract_metrics
from .glob_filter import filter_metrics, matches
from .index import CheckIndex, build_check_index
from .ranker import RankedGroup, RankedItem, RankReport, rank_metrics

__all__ = [
    "Metric",
    "extract_metrics",
    "filter_metrics",
    "matches",
    "CheckIndex",
    "build_check_index",
    "RankedGroup",
    "RankedItem",
    "RankReport",
    "rank_metrics",
]
