"""ts-rank: rank TypeScript type-check cost by file and symbol."""

__version__ = "0.1.0"
