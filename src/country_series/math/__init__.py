"""Statistical utilities for series analysis."""

from .stats import LinearFit, is_monotonic, least_squares, mean  # noqa: F401

__all__ = ["LinearFit", "is_monotonic", "least_squares", "mean"]
