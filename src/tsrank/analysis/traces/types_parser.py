"""Type catalog parser (``tsc --generateTrace`` types.json)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    line: int
    character: int


@dataclass(frozen=True)
class Declaration:
    path: str
    start: Position
    end: Position


@dataclass(frozen=True)
class IntrinsicType:
    """Any catalog entry that is not a named symbol (intrinsics, anonymous types)."""

    id: int
    intrinsic_name: Optional[str] = None
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class SymbolType:
    id: int
    symbol_name: str
    flags: tuple[str, ...] = ()
    recursion_id: Optional[int] = None
    instantiated_type: Optional[int] = None
    first_declaration: Optional[Declaration] = None
    display: Optional[str] = None


CatalogEntry = Union[IntrinsicType, SymbolType]


def _position(raw: Any) -> Position:
    raw = raw if isinstance(raw, dict) else {}
    return Position(line=int(raw.get("line") or 0), character=int(raw.get("character") or 0))


def _declaration(raw: Any) -> Optional[Declaration]:
    if not isinstance(raw, dict) or not raw.get("path"):
        return None
    return Declaration(
        path=str(raw["path"]),
        start=_position(raw.get("start")),
        end=_position(raw.get("end")),
    )


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else None


def parse_entry(row: dict[str, Any]) -> CatalogEntry:
    flags = tuple(str(flag) for flag in row.get("flags") or ())
    if "symbolName" in row:
        return SymbolType(
            id=int(row["id"]),
            symbol_name=str(row["symbolName"]),
            flags=flags,
            recursion_id=_optional_int(row.get("recursionId")),
            instantiated_type=_optional_int(row.get("instantiatedType")),
            first_declaration=_declaration(row.get("firstDeclaration")),
            display=row.get("display"),
        )
    intrinsic_name = row.get("intrinsicName")
    return IntrinsicType(
        id=int(row["id"]),
        intrinsic_name=str(intrinsic_name) if intrinsic_name is not None else None,
        flags=flags,
    )


def parse_types(rows: Iterable[Any]) -> List[CatalogEntry]:
    """Map raw catalog records to entries, keeping catalog order."""
    entries: list[CatalogEntry] = []
    skipped = 0
    for row in rows:
        if not isinstance(row, dict) or "id" not in row:
            skipped += 1
            continue
        entries.append(parse_entry(row))
    if skipped:
        logger.debug("Skipped malformed catalog records: count=%d", skipped)
    return entries
