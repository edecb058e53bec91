"""Custom exception hierarchy."""


class TsRankError(Exception):
    """Base error."""


class ConfigError(TsRankError):
    """Invalid configuration."""


class PatternError(TsRankError):
    """Raised when an inclusion glob cannot be compiled."""


class InputLoadError(TsRankError):
    """Raised when a trace or types file cannot be read or decoded."""
