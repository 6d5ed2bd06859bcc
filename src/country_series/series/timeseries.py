"""Year-ordered, sparsely populated annual series."""

from bisect import bisect_right
from collections.abc import Iterator, Sequence
from operator import attrgetter
from typing import Any

import structlog
from attrs import define, field

from ..data.models import Observation, SeriesRecord
from ..data.parser import parse_series_record
from ..math import LinearFit, stats
from ..output.utils import format_fixed, format_pairs
from .buffer import GrowableBuffer

logger = structlog.get_logger(__name__)

_year = attrgetter("year")


@define(slots=True)
class TimeSeries:
    """Annual observations of one series, kept sorted by year.

    Entries live in a :class:`GrowableBuffer` so the reported capacity follows
    the doubling/halving policy. Missing observations are stored as
    placeholders with ``value=None``; statistics and printing skip them.
    """

    series_name: str = ""
    series_code: str = ""
    _entries: GrowableBuffer[Observation] = field(factory=GrowableBuffer, repr=False)

    @property
    def count(self) -> int:
        return self._entries.count

    @property
    def capacity(self) -> int:
        return self._entries.capacity

    @property
    def years(self) -> list[int]:
        return [entry.year for entry in self._entries]

    def __len__(self) -> int:
        return self._entries.count

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._entries)

    def load(self, record: SeriesRecord | Sequence[str]) -> None:
        """Replace the contents with a parsed series line.

        ``record`` may be an already validated :class:`SeriesRecord` or the raw
        tokens ``name, code, v1960, ...``. Tokens are parsed before anything is
        touched, so a :class:`RecordParseError` leaves the series unchanged.
        """
        if not isinstance(record, SeriesRecord):
            record = parse_series_record(record)
        self._entries.reset()
        self.series_name = record.name
        self.series_code = record.code
        # Columns are consecutive years, so appending keeps the order.
        for observation in record.observations():
            self.add_series_load(observation.year, observation.value)
        logger.debug(
            "series.loaded",
            code=self.series_code,
            entries=self.count,
            capacity=self.capacity,
        )

    def add_series_load(self, year: int, datum: float | None) -> None:
        """Append an entry whose year is known to exceed every stored year.

        The buffer runs one resize check before the append.
        """
        self._entries.append(Observation(year=year, value=datum))

    def return_year_idx(self, year: int) -> int:
        """Binary search for ``year``.

        Returns the index of an exact match, otherwise the index of the greatest
        stored year below ``year``; -1 when the series is empty or ``year``
        precedes the first stored year.
        """
        return bisect_right(self._entries, year, key=_year) - 1

    def add_series_element(self, year: int, datum: float | None) -> bool:
        """Insert ``(year, datum)`` or fill a placeholder for ``year``.

        Fails without mutating when ``year`` already holds a real value.
        """
        idx = self.return_year_idx(year)
        if idx < 0:
            self._entries.insert(0, Observation(year=year, value=datum))
            return True
        existing = self._entries[idx]
        if existing.year != year:
            self._entries.insert(idx + 1, Observation(year=year, value=datum))
            return True
        if not existing.is_valid:
            self._entries[idx] = existing.with_value(datum)
            return True
        logger.debug("series.duplicate_insert", code=self.series_code, year=year)
        return False

    def update(self, year: int, datum: float) -> bool:
        """Overwrite the value for ``year``; a negative ``datum`` removes the entry.

        Fails when ``year`` is absent or holds no real value.
        """
        idx = self.return_year_idx(year)
        if idx < 0:
            return False
        existing = self._entries[idx]
        if existing.year != year or not existing.is_valid:
            return False
        if datum < 0:
            self.remove_series_element(idx)
        else:
            self._entries[idx] = existing.with_value(datum)
        return True

    def remove_series_element(self, idx: int) -> Observation:
        """Remove the entry at ``idx``; capacity is left as is."""
        return self._entries.remove(idx)

    def valid_observations(self) -> list[Observation]:
        """Return the entries that carry a real value, in year order."""
        return [entry for entry in self._entries if entry.is_valid]

    def _valid_arrays(self) -> tuple[list[int], list[float]]:
        valid = self.valid_observations()
        return [entry.year for entry in valid], [entry.value for entry in valid]  # type: ignore[misc]

    def has_valid_data(self) -> bool:
        return any(entry.is_valid for entry in self._entries)

    def render(self) -> str | None:
        """Return the ``(year,value)`` listing, or None without valid data."""
        valid = self.valid_observations()
        if not valid:
            return None
        return format_pairs((entry.year, entry.value) for entry in valid)  # type: ignore[misc]

    def mean(self) -> float | None:
        _, values = self._valid_arrays()
        return stats.mean(values)

    def describe_mean(self) -> str | None:
        series_mean = self.mean()
        if series_mean is None:
            return None
        return f"mean is {format_fixed(series_mean)}"

    def is_monotonic(self) -> bool | None:
        """Return whether the valid values move in one direction; None without data."""
        _, values = self._valid_arrays()
        return stats.is_monotonic(values)

    def describe_monotonic(self) -> str | None:
        monotonic = self.is_monotonic()
        if monotonic is None:
            return None
        return "series is monotonic" if monotonic else "series is not monotonic"

    def best_fit(self) -> LinearFit | None:
        """Least squares line over the valid points.

        None when there is no valid data or a single point, where the slope is
        undefined.
        """
        years, values = self._valid_arrays()
        return stats.least_squares(years, values)

    def describe_fit(self) -> str | None:
        fit = self.best_fit()
        if fit is None:
            return None
        return f"slope is {format_fixed(fit.slope)} intercept is {format_fixed(fit.intercept)}"

    def size_capacity(self) -> str:
        """Report entry count and capacity; a series without valid data reports the floor."""
        if not self.has_valid_data():
            return f"size is 0 capacity is {self._entries.floor}"
        return f"size is {self.count} capacity is {self.capacity}"

    def copy(self) -> "TimeSeries":
        """Return an independent copy with its own storage."""
        return TimeSeries(
            series_name=self.series_name,
            series_code=self.series_code,
            entries=self._entries.copy(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary of the series."""
        fit = self.best_fit()
        return {
            "name": self.series_name,
            "code": self.series_code,
            "size": self.count,
            "capacity": self.capacity,
            "observations": [
                {"year": entry.year, "value": entry.value} for entry in self.valid_observations()
            ],
            "mean": self.mean(),
            "monotonic": self.is_monotonic(),
            "fit": None if fit is None else {"slope": fit.slope, "intercept": fit.intercept},
        }


__all__ = ["TimeSeries"]
