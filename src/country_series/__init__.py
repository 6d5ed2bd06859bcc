"""Per-country annual time series with capacity-managed storage."""

from .series import CountryData, Outcome, TimeSeries

__version__ = "0.1.0"

__all__ = ["CountryData", "Outcome", "TimeSeries", "__version__"]
