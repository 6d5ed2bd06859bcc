"""Text rendering helpers for series results."""

from .utils import format_fixed, format_pairs, format_value

__all__ = ["format_fixed", "format_pairs", "format_value"]
