"""Compiler trace parser (``tsc --generateTrace`` trace.json)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceEvent:
    cat: str
    name: str
    ph: str = ""
    ts: float = 0.0
    dur: float = 0.0
    # excluded from the hash, the mapping itself is not hashable
    args: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def source_id(self) -> Optional[int]:
        return _as_id(self.args.get("sourceId"))

    @property
    def target_id(self) -> Optional[int]:
        return _as_id(self.args.get("targetId"))


def _as_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def parse_trace(rows: Iterable[Any]) -> List[TraceEvent]:
    """Map raw trace records to events, skipping anything that is not an object."""
    events: list[TraceEvent] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict):
            skipped += 1
            continue
        args = row.get("args")
        events.append(
            TraceEvent(
                cat=str(row.get("cat") or ""),
                name=str(row.get("name") or ""),
                ph=str(row.get("ph") or ""),
                ts=_as_float(row.get("ts")),
                dur=_as_float(row.get("dur")),
                args=MappingProxyType(args if isinstance(args, dict) else {}),
            )
        )
    if skipped:
        logger.debug("Skipped non-object trace records: count=%d", skipped)
    return events
