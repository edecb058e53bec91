"""Load -> extract -> filter -> rank."""

from __future__ import annotations

import logging
import time

from tsrank.analysis.correlation.extractor import extract_metrics
from tsrank.analysis.correlation.glob_filter import filter_metrics
from tsrank.analysis.correlation.ranker import RankReport, rank_metrics
from tsrank.analysis.traces import parse_trace, parse_types
from tsrank.core.config import RankConfig
from tsrank.storage.loader import LoadedInputs, load_inputs_sync

logger = logging.getLogger(__name__)


def build_report(inputs: LoadedInputs, config: RankConfig) -> RankReport:
    """Rank already-loaded inputs; synchronous from here on."""
    started = time.perf_counter()
    trace = parse_trace(inputs.trace)
    catalog = parse_types(inputs.types)
    metrics = extract_metrics(
        trace,
        catalog,
        check_names=config.check_names,
        check_categories=config.check_categories,
        dependency_marker=config.dependency_marker,
    )
    filtered = filter_metrics(metrics, config.pattern)
    logger.info("Filtered metrics: pattern=%s kept=%d/%d", config.pattern, len(filtered), len(metrics))
    report = rank_metrics(
        filtered,
        strategy=config.strategy,
        group_limit=config.file_limit,
        item_limit=config.symbol_limit,
        trace_count=len(inputs.trace),
        catalog_count=len(inputs.types),
        metric_count=len(metrics),
        warnings=inputs.warnings,
    )
    logger.info("Parse time: %.3fs", time.perf_counter() - started)
    return report


def run_report(config: RankConfig) -> RankReport:
    inputs = load_inputs_sync(config.trace_path, config.types_path)
    return build_report(inputs, config)
