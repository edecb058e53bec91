"""Report rendering utilities."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Iterable, List

import typer

from tsrank.analysis.correlation.ranker import RankedGroup, RankedItem, RankReport
from tsrank.core.config import RankConfig, RankStrategy

BUCKET_TITLES = {"source": "source", "dependencies": "node_modules"}


def _relative(path: str, cwd: Path) -> str:
    try:
        return os.path.relpath(path, cwd)
    except ValueError:
        # different drive on Windows
        return path


def format_file(path: str, cwd: Path) -> str:
    rel = _relative(path, cwd)
    directory, base = os.path.split(rel)
    prefix = f"{directory}{os.sep}" if directory else ""
    return f"{prefix}{typer.style(base, bold=True, underline=True)}"


def format_item(item: RankedItem, config: RankConfig) -> str:
    width = config.name_width
    duration = typer.style(f"{item.duration_ms:>10.2f}", fg=typer.colors.YELLOW, bold=True)
    name = typer.style(item.name[:width].ljust(width), fg=typer.colors.BRIGHT_BLUE, bold=True)
    position = typer.style(f":{item.line}:{item.column}", dim=True)
    return f"    {duration} ms  {name} {format_file(item.path, config.cwd)}{position}"


def format_group_header(group: RankedGroup, report: RankReport, config: RankConfig) -> str:
    if report.strategy is RankStrategy.FILES:
        title = format_file(group.key, config.cwd)
        label = f"# {typer.style(str(group.rank), fg=typer.colors.CYAN, bold=True)}"
    else:
        title = BUCKET_TITLES.get(group.key, group.key)
        label = typer.style(",".join(config.check_names), fg=typer.colors.CYAN, bold=True)
    total = typer.style(f"{group.total_ms:.2f}", fg=typer.colors.RED, bold=True)
    share = typer.style(f"{group.percentage} %", fg=typer.colors.GREEN, bold=True)
    count = typer.style(str(group.count), fg=typer.colors.BRIGHT_GREEN)
    return f"  {label} {title}  {total} ms ({share} of total metrics) ({count} metrics)"


def render_groups(report: RankReport, config: RankConfig) -> List[str]:
    lines: list[str] = []
    for group in report.groups:
        lines.append(format_group_header(group, report, config))
        lines.append("")
        lines.extend(format_item(item, config) for item in group.items)
        lines.append("")
    return lines


def render_report(report: RankReport, config: RankConfig, *, elapsed: float | None = None) -> str:
    heading = (
        "Files ranked by type check duration:"
        if report.strategy is RankStrategy.FILES
        else "Symbols ranked by type check duration:"
    )
    lines = [
        "",
        "ts-rank",
        "",
        "Ranking output from tsconfig.compilerOptions.generateTrace",
    ]
    lines.extend(f"  {key}: {value}" for key, value in config.describe().items())
    lines.extend(["", f":: {heading}", ""])
    lines.extend(render_groups(report, config))

    kinds = ",".join(typer.style(name, fg=typer.colors.CYAN) for name in config.check_names)
    if elapsed is not None:
        lines.append(f":: Parse time: {elapsed:.3f}s")
    lines.append(f":: {report.trace_count} total traces, {report.catalog_count} total types")
    lines.append(f":: Measured {report.metric_count} check metrics of kind: [{kinds}]")
    lines.append(f":: {report.grand_total_ms:.0f} ms total measured duration")
    lines.extend(_render_warnings(report.warnings))
    lines.append("")
    return "\n".join(lines)


def _render_warnings(warnings: Iterable[str]) -> List[str]:
    return [typer.style(f":: warning: {message}", fg=typer.colors.YELLOW) for message in warnings]


def render_json(report: RankReport) -> str:
    return json.dumps(report.to_dict(), indent=2)
