import math

from tsrank.analysis.correlation import extract_metrics, rank_metrics
from tsrank.analysis.correlation.ranker import percentage
from tsrank.analysis.traces import parse_trace, parse_types
from tsrank.core.config import RankStrategy


def _build(specs):
    """specs: (name, path, duration_us) tuples; ids follow list order."""
    trace = parse_trace(
        [
            {"cat": "check", "name": "structuredTypeRelatedTo", "dur": dur, "args": {"sourceId": i}}
            for i, (_, _, dur) in enumerate(specs)
        ]
    )
    catalog = parse_types(
        [
            {
                "id": i,
                "symbolName": name,
                "firstDeclaration": {
                    "path": path,
                    "start": {"line": i + 1, "character": 2},
                    "end": {"line": i + 1, "character": 9},
                },
                "flags": [],
            }
            for i, (name, path, _) in enumerate(specs)
        ]
    )
    return extract_metrics(trace, catalog)


SPECS = [
    ("A1", "/p/src/a.ts", 1000),
    ("B1", "/p/src/b.ts", 5000),
    ("A2", "/p/src/a.ts", 3000),
    ("C1", "/p/node_modules/c/index.d.ts", 2000),
    ("A3", "/p/src/a.ts", 500),
    ("C2", "/p/node_modules/c/index.d.ts", 2000),
]


def test_file_ranking_totals_and_order():
    report = rank_metrics(_build(SPECS))

    assert [g.key for g in report.groups] == [
        "/p/src/b.ts",
        "/p/src/a.ts",
        "/p/node_modules/c/index.d.ts",
    ]
    assert [g.rank for g in report.groups] == [1, 2, 3]
    totals = {g.key: g.total_ms for g in report.groups}
    assert totals["/p/src/a.ts"] == 4.5
    assert totals["/p/src/b.ts"] == 5.0
    assert totals["/p/node_modules/c/index.d.ts"] == 4.0
    assert report.grand_total_ms == 13.5
    assert math.isclose(sum(g.total_ms for g in report.groups), report.grand_total_ms)
    assert [g.count for g in report.groups] == [1, 3, 2]
    assert all(0 <= g.percentage <= 100 for g in report.groups)
    assert [g.percentage for g in report.groups] == [37, 33, 30]


def test_items_within_file_are_sorted_and_truncated():
    report = rank_metrics(_build(SPECS), item_limit=2)

    a_group = next(g for g in report.groups if g.key == "/p/src/a.ts")
    assert [item.name for item in a_group.items] == ["A2", "A1"]
    assert a_group.count == 3
    assert a_group.total_ms == 4.5
    first = a_group.items[0]
    assert first.duration_ms == 3.0
    assert first.path == "/p/src/a.ts"
    assert (first.line, first.column) == (3, 2)


def test_equal_durations_keep_catalog_order():
    report = rank_metrics(_build(SPECS))

    c_group = next(g for g in report.groups if g.key.endswith("index.d.ts"))
    assert [item.name for item in c_group.items] == ["C1", "C2"]


def test_file_limit_keeps_highest_totals():
    metrics = _build(SPECS)

    report = rank_metrics(metrics, group_limit=2)

    assert [g.key for g in report.groups] == ["/p/src/b.ts", "/p/src/a.ts"]
    assert report.grand_total_ms == 13.5
    assert rank_metrics(metrics, group_limit=0).groups == []


def test_tied_file_totals_break_by_path():
    specs = [
        ("Z", "/p/src/z.ts", 100),
        ("M", "/p/src/m.ts", 100),
        ("A", "/p/src/a.ts", 100),
        ("Big", "/p/src/big.ts", 900),
    ]

    report = rank_metrics(_build(specs), group_limit=3)

    assert [g.key for g in report.groups] == ["/p/src/big.ts", "/p/src/a.ts", "/p/src/m.ts"]


def test_symbol_strategy_splits_source_and_dependencies():
    report = rank_metrics(_build(SPECS), strategy=RankStrategy.SYMBOLS, item_limit=2, group_limit=0)

    assert [g.key for g in report.groups] == ["source", "dependencies"]
    source, deps = report.groups
    assert [item.name for item in source.items] == ["B1", "A2"]
    assert source.count == 4
    assert source.total_ms == 9.5
    assert [item.name for item in deps.items] == ["C1", "C2"]
    assert deps.total_ms == 4.0
    assert source.percentage + deps.percentage == 100


def test_empty_input_has_zero_totals():
    for strategy in RankStrategy:
        report = rank_metrics([], strategy=strategy, trace_count=3, catalog_count=4)

        assert report.grand_total_ms == 0
        assert report.trace_count == 3
        assert report.catalog_count == 4
        assert report.metric_count == 0
        assert all(g.percentage == 0 for g in report.groups)

    assert rank_metrics([]).groups == []


def test_percentage_handles_zero_grand_total():
    assert percentage(0, 0) == 0
    assert percentage(5, 0) == 0
    assert percentage(1, 2) == 50
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67


def test_ranking_is_idempotent_and_plain_data():
    metrics = _build(SPECS)

    first = rank_metrics(metrics, item_limit=3, metric_count=10, warnings=["trace missing"])
    second = rank_metrics(metrics, item_limit=3, metric_count=10, warnings=["trace missing"])

    assert first == second
    data = first.to_dict()
    assert data["strategy"] == "files"
    assert data["metric_count"] == 10
    assert data["filtered_count"] == 6
    assert data["warnings"] == ["trace missing"]
    assert data["groups"][0] == {
        "rank": 1,
        "key": "/p/src/b.ts",
        "total_ms": 5.0,
        "percentage": 37,
        "count": 1,
        "items": [
            {"duration_ms": 5.0, "name": "B1", "path": "/p/src/b.ts", "line": 2, "column": 2}
        ],
    }
