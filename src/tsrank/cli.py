"""CLI entrypoint using Typer."""

from __future__ import annotations

import logging
import time
from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer

from tsrank.core.config import RankConfig, RankStrategy, build_config, load_yaml
from tsrank.core.errors import TsRankError
from tsrank.evaluation.reports import render_json, render_report
from tsrank.orchestration import run_report

app = typer.Typer(help="Rank TypeScript type-check cost from tsc --generateTrace output")


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def _load_config(config: Optional[str], **overrides) -> RankConfig:
    raw = load_yaml(config) if config else {}
    return build_config(raw, **overrides)


@app.command()
def rank(
    trace_file: Optional[Path] = typer.Option(None, "--trace-file", help="trace.json path"),
    types_file: Optional[Path] = typer.Option(None, "--types-file", help="types.json path"),
    pattern: Optional[str] = typer.Option(
        None, "--pattern", "-p", help="Reduce the ranking to files that match this glob"
    ),
    file_limit: Optional[int] = typer.Option(None, "--file-limit", "-f", help="Files to show [50]"),
    symbol_limit: Optional[int] = typer.Option(
        None, "--symbol-limit", "-t", help="Symbols to show per file or bucket [10]"
    ),
    mode: Optional[RankStrategy] = typer.Option(
        None, "--mode", "-m", help="files: per-file drill-down, symbols: source vs node_modules"
    ),
    check_name: List[str] = typer.Option(
        [], "--check-name", help="Trace operation to correlate. Repeatable."
    ),
    dependency_marker: Optional[str] = typer.Option(
        None, help="Path fragment marking third-party declarations"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TEXT, "--format", help="Report format"),
    config: Optional[str] = typer.Option(None, help="Optional config YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    # Demo: tsc -p . --generateTrace .tsTrace && ts-rank --pattern 'src/**' -f 20
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    try:
        cfg = _load_config(
            config,
            trace_file=trace_file,
            types_file=types_file,
            pattern=pattern,
            file_limit=file_limit,
            symbol_limit=symbol_limit,
            strategy=mode,
            check_names=check_name or None,
            dependency_marker=dependency_marker,
        )
        started = time.perf_counter()
        report = run_report(cfg)
    except TsRankError as exc:
        typer.echo(f"ts-rank: {exc}", err=True)
        raise typer.Exit(code=2)

    if output_format is OutputFormat.JSON:
        typer.echo(render_json(report))
    else:
        typer.echo(render_report(report, cfg, elapsed=time.perf_counter() - started))


if __name__ == "__main__":
    app()
