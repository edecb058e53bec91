"""Core utilities."""

from .config import RankConfig, RankStrategy, build_config, load_yaml
from .errors import ConfigError, InputLoadError, PatternError, TsRankError

__all__ = [
    "RankConfig",
    "RankStrategy",
    "build_config",
    "load_yaml",
    "TsRankError",
    "ConfigError",
    "InputLoadError",
    "PatternError",
]
