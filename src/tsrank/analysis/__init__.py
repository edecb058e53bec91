"""Trace analysis: parsing, correlation and ranking."""
