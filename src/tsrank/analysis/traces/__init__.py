"""Trace and type catalog parsers."""

from .trace_parser import TraceEvent, parse_trace
from .types_parser import (
    CatalogEntry,
    Declaration,
    IntrinsicType,
    Position,
    SymbolType,
    parse_types,
)

__all__ = [
    "TraceEvent",
    "parse_trace",
    "CatalogEntry",
    "Declaration",
    "IntrinsicType",
    "Position",
    "SymbolType",
    "parse_types",
]
