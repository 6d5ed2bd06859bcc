"""Series containers: capacity-managed storage, time series and countries."""

from .buffer import GrowableBuffer
from .country import CountryData
from .outcome import FAILURE, SUCCESS, FailureReason, Outcome
from .timeseries import TimeSeries

__all__ = [
    "CountryData",
    "FAILURE",
    "FailureReason",
    "GrowableBuffer",
    "Outcome",
    "SUCCESS",
    "TimeSeries",
]
