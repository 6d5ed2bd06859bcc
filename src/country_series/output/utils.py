"""Shared helpers for rendering command results."""

from collections.abc import Iterable


def format_value(value: float) -> str:
    """Format an observation with up to six significant digits."""
    return f"{value:g}"


def format_fixed(value: float) -> str:
    """Format a derived statistic with six decimals."""
    return f"{value:f}"


def format_pairs(pairs: Iterable[tuple[int, float]]) -> str:
    """Render ``(year,value)`` pairs separated by single spaces."""
    return " ".join(f"({year},{format_value(value)})" for year, value in pairs)
