"""Configuration loading and normalization.

A ``RankConfig`` is built once per invocation, either purely from command
line options or from an optional YAML file with the options layered on top,
and then passed explicitly to the extraction and ranking layers.  Environment
variables in YAML values are expanded so shared configs can point at
per-machine trace directories.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TRACE_FILE = "./.tsTrace/trace.json"
DEFAULT_TYPES_FILE = "./.tsTrace/types.json"
DEFAULT_PATTERN = "**/*"
STRUCTURED_TYPE_CHECK = "structuredTypeRelatedTo"


class RankStrategy(str, Enum):
    FILES = "files"
    SYMBOLS = "symbols"


def _expand_env(text: str) -> str:
    """Expand ${VARS} inside YAML text."""
    return os.path.expandvars(text)


class RankConfig(BaseModel):
    trace_file: Path = Path(DEFAULT_TRACE_FILE)
    types_file: Path = Path(DEFAULT_TYPES_FILE)
    pattern: str = DEFAULT_PATTERN
    file_limit: int = Field(default=50, ge=0)
    symbol_limit: int = Field(default=10, ge=0)
    strategy: RankStrategy = RankStrategy.FILES
    check_names: list[str] = Field(default_factory=lambda: [STRUCTURED_TYPE_CHECK])
    check_categories: list[str] = Field(default_factory=lambda: ["check", "checkTypes"])
    dependency_marker: str = "/node_modules"
    name_width: int = Field(default=30, ge=1)
    cwd: Path = Field(default_factory=Path.cwd)

    @property
    def trace_path(self) -> Path:
        return (self.cwd / self.trace_file).resolve()

    @property
    def types_path(self) -> Path:
        return (self.cwd / self.types_file).resolve()

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> "RankConfig":
        raw = load_yaml(path)
        return build_config(raw, **overrides)

    def describe(self) -> dict[str, Any]:
        """Flat view of the resolved settings, printed at the top of a report."""
        return {
            "trace_file": str(self.trace_path),
            "types_file": str(self.types_path),
            "pattern": self.pattern,
            "file_limit": self.file_limit,
            "symbol_limit": self.symbol_limit,
            "mode": self.strategy.value,
            "cwd": str(self.cwd),
        }


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load YAML and expand environment variables."""
    p = Path(path)
    try:
        text = _expand_env(p.read_text(encoding="utf-8"))
        data = yaml.safe_load(text) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {p} must contain a mapping, got {type(data).__name__}")
    logger.debug("Loaded YAML: path=%s keys=%s", p, list(data.keys()))
    return data


def normalize_raw_config(raw: dict[str, Any]) -> dict[str, Any]:
    """Accept the original camel/upper-case option names alongside field names."""
    aliases = {
        "FILE_LIMIT": "file_limit",
        "FILE_TYPE_LIMIT": "symbol_limit",
        "TRACE_FILE": "trace_file",
        "TYPES_FILE": "types_file",
        "PATTERN": "pattern",
        "logCount": "symbol_limit",
        "traceFile": "trace_file",
        "typesFile": "types_file",
        "mode": "strategy",
    }
    normalized: dict[str, Any] = {}
    for key, value in raw.items():
        normalized[aliases.get(key, key)] = value
    return normalized


def build_config(raw: Optional[dict[str, Any]] = None, **overrides: Any) -> RankConfig:
    """Merge raw settings with explicit overrides (``None`` overrides are ignored)."""
    merged = normalize_raw_config(dict(raw or {}))
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    try:
        cfg = RankConfig(**merged)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    logger.debug("Resolved config: %s", cfg.describe())
    return cfg
